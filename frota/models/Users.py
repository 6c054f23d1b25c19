from datetime import datetime, timezone

from flask_login import UserMixin

from frota.app import db
from frota.models.Permissions import Role, _enum_column


class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(120))
    role = db.Column(_enum_column(Role, 30), nullable=False, default=Role.STANDARD_USER)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    def is_admin(self):
        return self.role == Role.ADMIN

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.username} role={self.role}>"
