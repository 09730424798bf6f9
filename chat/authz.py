from functools import wraps
from auth.utils import resolve_identity
from chat.errors import Forbidden
from chat.services import ACCESS_DENIED


def admin_required(fn):
    """
    Decorator for admin-only chat endpoints. Resolves the caller once and
    hands it to the view as the `identity` keyword argument.

    Missing/invalid tokens are treated like non-admins (403), not 401.
    """
    @wraps(fn)
    def _wrapped(*args, **kwargs):
        identity = resolve_identity()
        if identity is None or not identity.is_admin:
            raise Forbidden(ACCESS_DENIED)
        kwargs["identity"] = identity
        return fn(*args, **kwargs)
    return _wrapped
