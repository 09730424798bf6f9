from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from flask_jwt_extended import create_access_token, get_current_user, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from extensions import db
from .models import User, UserRole


@dataclass(frozen=True)
class Identity:
    """The caller of a request, resolved once at the HTTP boundary."""
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def init_jwt_manager(app, jwt):
    """
    Register the user lookup on the JWTManager instance.
    Call this in your factory after you init JWTManager:
        init_jwt_manager(app, jwt)
    """
    @jwt.user_lookup_loader
    def load_user(jwt_header, jwt_payload):
        # Returning None makes flask-jwt-extended raise UserLookupError
        try:
            uid = int(jwt_payload.get("sub"))
        except (TypeError, ValueError):
            return None
        user = db.session.get(User, uid)
        if user is None or user.is_blocked:
            return None
        return user


def issue_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    if getattr(user, "is_blocked", False):
        raise PermissionError("Account is blocked")
    return create_access_token(identity=str(user.id), expires_delta=expires_delta)


def resolve_identity() -> Optional[Identity]:
    """
    Returns the Identity behind the request's JWT, or None when the token is
    missing, invalid, expired, or points to an unknown/blocked user.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError):
        return None
    user = get_current_user()
    if user is None:
        return None
    return Identity(user_id=user.id, role=user.papel)
