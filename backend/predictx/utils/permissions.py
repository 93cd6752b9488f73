"""Permission helpers."""
from functools import wraps

from flask_jwt_extended import get_jwt, verify_jwt_in_request

from predictx.utils.enums import UserRole
from predictx.utils.exceptions import ForbiddenError


def is_admin(claims):
    return claims.get("role") == UserRole.ADMIN.value


def admin_required(fn):
    """Require a valid access token that carries the admin role claim."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        if not is_admin(get_jwt()):
            raise ForbiddenError("You need admin privileges to access this page")
        return fn(*args, **kwargs)
    return wrapper
