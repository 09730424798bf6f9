from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import CheckConstraint
from extensions import db

utcnow = lambda: datetime.now(timezone.utc)


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "usuario"

ROLE_VALUES = tuple(r.value for r in UserRole)


class TimestampMixin:
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )


class User(TimestampMixin, db.Model):
    __tablename__ = 'users'
    __table_args__ = (
        CheckConstraint(f"papel IN {ROLE_VALUES}", name="ck_users_papel"),
    )

    id         = db.Column(db.Integer, primary_key=True)
    email      = db.Column(db.String(255), unique=True, nullable=False, index=True)
    nome       = db.Column(db.String(255), nullable=True)
    papel      = db.Column(db.String(20), nullable=False, default=UserRole.USER.value)
    is_blocked = db.Column(db.Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<User {self.email} ({self.papel})>"
