# solhub_admin/core/permissions.py
from functools import wraps
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from solhub_admin.core.exceptions import PermissionDenied


def require_dashboard_admin(f):
    """Reject callers whose token does not carry ``is_dashboard_admin``"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        claims = get_jwt()
        if claims.get("is_dashboard_admin") is not True:
            raise PermissionDenied("Dashboard admin access required")

        return f(*args, **kwargs)

    return decorated_function

