"""Tabela de permissões por papel, recurso e ação."""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from frota.app import db


class InvalidPermissionKey(ValueError):
    """Raised when a role, resource or action string is not recognised."""


class _PermissionKey(str, enum.Enum):
    @classmethod
    def parse(cls, value):
        """Accept a member or its string value; anything else is rejected."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise InvalidPermissionKey(f"{cls.__name__} inválido: {value!r}")

    def __str__(self) -> str:
        return self.value


class Role(_PermissionKey):
    ADMIN = "admin"
    DIRECTION = "direction"
    STANDARD_USER = "utilisateur"


class Resource(_PermissionKey):
    VEHICLES = "vehicles"
    DRIVERS = "drivers"
    TOURS = "tours"
    FUEL_ENTRIES = "fuel_entries"
    DOCUMENTS = "documents"
    MAINTENANCE_ENTRIES = "maintenance_entries"
    PRE_DEPARTURE_CHECKLISTS = "pre_departure_checklists"
    USERS = "users"
    PROFILE = "profile"
    PERMISSIONS = "permissions"


class Action(_PermissionKey):
    VIEW = "view"
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"


def _enum_column(enum_cls, length):
    return db.Enum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        validate_strings=True,
        length=length,
    )


class PermissionRule(db.Model):
    __tablename__ = "permission_rule"
    __table_args__ = (
        db.UniqueConstraint("role", "resource", "action", name="uq_permission_rule_key"),
    )

    id = db.Column(db.Integer, primary_key=True)
    role = db.Column(_enum_column(Role, 30), nullable=False, index=True)
    resource = db.Column(_enum_column(Resource, 50), nullable=False)
    action = db.Column(_enum_column(Action, 20), nullable=False)
    allowed = db.Column(db.Boolean, nullable=False, default=False)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def key(self):
        return (self.role, self.resource, self.action)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return (
            f"<PermissionRule {self.role}:{self.resource}:{self.action} "
            f"allowed={self.allowed}>"
        )
