"""Autoridade de permissões: cache em memória da tabela ``permission_rule``.

``can_access`` é síncrono e só consulta a cache.  ``update_permission`` é a
única operação com I/O e só altera a cache depois de a escrita ser
confirmada pela base de dados.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from flask import Flask, current_app
from sqlalchemy.exc import SQLAlchemyError

from frota.models.Permissions import Action, InvalidPermissionKey, PermissionRule, Resource, Role
from frota.repository.Permissions_repository import PermissionRepo
from frota.utils.constants.constants import DEFAULT_ROLE_PERMISSIONS
from frota.utils.dates import as_utc
from frota.utils.logs import logger

PermissionKey = Tuple[Role, Resource, Action]

_STORE_ERRORS = (SQLAlchemyError, OSError)


class PermissionServiceError(Exception):
    """Base exception for permission authority failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 400,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.context = context or {}


class Unauthorized(PermissionServiceError):
    """Raised when a non-admin caller tries to change the permission table."""

    def __init__(
        self,
        message: str = "Apenas administradores podem alterar permissões.",
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, status_code=403, context=context)


class StoreError(PermissionServiceError):
    """Raised when the permission store cannot be read or written."""

    def __init__(
        self,
        message: str = "Tabela de permissões indisponível.",
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, status_code=503, context=context)


@dataclass(frozen=True)
class PermissionGrant:
    role: Role
    resource: Resource
    action: Action
    allowed: bool
    updated_at: Optional[datetime]

    @classmethod
    def from_model(cls, rule: PermissionRule) -> "PermissionGrant":
        return cls(
            role=Role.parse(rule.role),
            resource=Resource.parse(rule.resource),
            action=Action.parse(rule.action),
            allowed=bool(rule.allowed),
            updated_at=as_utc(rule.updated_at) if rule.updated_at else None,
        )

    @property
    def key(self) -> PermissionKey:
        return (self.role, self.resource, self.action)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "resource": self.resource.value,
            "action": self.action.value,
            "allowed": self.allowed,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


def _parse_key(role: Any, resource: Any, action: Any) -> PermissionKey:
    return Role.parse(role), Resource.parse(resource), Action.parse(action)


class PermissionAuthority:
    def __init__(
        self,
        store: Optional[PermissionRepo] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store or PermissionRepo()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._grants: Dict[PermissionKey, PermissionGrant] = {}
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------
    def load(self) -> int:
        """Replace the cache with every row of the store.

        On failure the previous cache stays in place (empty before the first
        successful load, so non-admin checks fail closed).
        """

        try:
            rules = self.store.list_rules()
        except _STORE_ERRORS as exc:
            logger.error("Falha ao carregar permissões: %s", exc)
            raise StoreError("Não foi possível carregar as permissões.") from exc

        grants: Dict[PermissionKey, PermissionGrant] = {}
        skipped = 0
        for rule in rules:
            try:
                grant = PermissionGrant.from_model(rule)
            except InvalidPermissionKey as exc:
                skipped += 1
                logger.warning(
                    "Regra ignorada (%s:%s:%s): %s",
                    rule.role, rule.resource, rule.action, exc,
                )
                continue
            grants[grant.key] = grant
        self._grants = grants
        self._loaded = True
        if skipped:
            logger.warning("%d regras com chaves desconhecidas ficaram fora da cache", skipped)
        logger.info("Permissões carregadas: %d regras", len(grants))
        return len(grants)

    def can_access(self, role: Any, resource: Any, action: Any) -> bool:
        if role is None:
            return False
        key = _parse_key(role, resource, action)
        if key[0] is Role.ADMIN:
            return True
        grant = self._grants.get(key)
        return grant is not None and grant.allowed

    def grants(self) -> List[PermissionGrant]:
        return sorted(
            self._grants.values(),
            key=lambda g: (list(Role).index(g.role), list(Resource).index(g.resource), list(Action).index(g.action)),
        )

    def matrix(self) -> Dict[str, Dict[str, Dict[str, bool]]]:
        """Effective table ``role -> resource -> action -> allowed``."""

        return {
            role.value: {
                resource.value: {
                    action.value: self.can_access(role, resource, action) for action in Action
                }
                for resource in Resource
            }
            for role in Role
        }

    # ------------------------------------------------------------------
    # Escrita
    # ------------------------------------------------------------------
    def update_permission(
        self,
        role: Any,
        resource: Any,
        action: Any,
        allowed: bool,
        *,
        actor_role: Any,
    ) -> PermissionGrant:
        try:
            actor = Role.parse(actor_role) if actor_role is not None else None
        except InvalidPermissionKey:
            actor = None
        if actor is not Role.ADMIN:
            logger.warning(
                "Alteração de permissão recusada para papel %s (%s:%s:%s)",
                actor_role, role, resource, action,
            )
            raise Unauthorized(context={"actor_role": str(actor_role) if actor_role is not None else None})

        key = _parse_key(role, resource, action)
        try:
            rule = self.store.upsert(*key, bool(allowed), updated_at=self._clock())
        except _STORE_ERRORS as exc:
            logger.error("Falha ao gravar permissão %s:%s:%s: %s", *key, exc)
            raise StoreError(
                "Não foi possível gravar a permissão.",
                context={"role": key[0].value, "resource": key[1].value, "action": key[2].value},
            ) from exc

        grant = PermissionGrant.from_model(rule)
        self._grants[grant.key] = grant
        logger.process(
            "Permissão %s:%s:%s -> %s",
            grant.role, grant.resource, grant.action,
            "permitida" if grant.allowed else "negada",
        )
        return grant

    def seed_defaults(self, *, actor_role: Any) -> int:
        """Write the default grant of every non-admin key that has no row yet."""

        if not self._loaded:
            self.load()

        created = 0
        for role, resources in DEFAULT_ROLE_PERMISSIONS.items():
            for resource, actions in resources.items():
                for action, allowed in actions.items():
                    if (role, resource, action) in self._grants:
                        continue
                    self.update_permission(role, resource, action, allowed, actor_role=actor_role)
                    created += 1
        if created:
            logger.info("Permissões por omissão semeadas: %d regras", created)
        return created


def install_permission_authority(app: Flask, authority: PermissionAuthority) -> None:
    app.extensions["permission_authority"] = authority


def get_permission_authority(app: Optional[Flask] = None) -> PermissionAuthority:
    app_obj = app or current_app
    authority = app_obj.extensions.get("permission_authority")
    if isinstance(authority, PermissionAuthority):
        return authority
    raise RuntimeError("PermissionAuthority not initialised for this Flask application")


__all__ = [
    "PermissionAuthority",
    "PermissionGrant",
    "PermissionServiceError",
    "StoreError",
    "Unauthorized",
    "get_permission_authority",
    "install_permission_authority",
]
