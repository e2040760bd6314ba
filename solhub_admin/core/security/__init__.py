# solhub_admin/core/security/__init__.py
from typing import Optional

from flask import current_app, jsonify
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from werkzeug.security import generate_password_hash, check_password_hash

from solhub_admin.extensions import cache

REVOKED_PREFIX = "revoked-token:"


class SecurityMixin:
    @property
    def password(self):
        raise AttributeError("password is not a readable attribute")

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)


def get_current_admin_id() -> Optional[str]:
    """Get the current admin identity from the JWT, if any"""
    try:
        verify_jwt_in_request(optional=True)
        user_id = get_jwt_identity()
        return str(user_id) if user_id else None
    except Exception as e:
        current_app.logger.debug(f"Error getting current admin: {str(e)}")
        return None


def revoke_token(jti, expires_in):
    """Remember a logged-out token until it would have expired anyway"""
    cache.set(f"{REVOKED_PREFIX}{jti}", True, timeout=max(int(expires_in), 1))


def register_jwt_callbacks(jwt):
    """Render token failures with the same error shape as the rest of the API"""

    def _unauthorized(message):
        return jsonify({"error": "Unauthorized", "message": message}), 401

    @jwt.unauthorized_loader
    def missing_token(reason):
        return _unauthorized(reason)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _unauthorized(reason)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _unauthorized("Token has expired")

    @jwt.token_in_blocklist_loader
    def is_revoked(jwt_header, jwt_payload):
        return bool(cache.get(f"{REVOKED_PREFIX}{jwt_payload['jti']}"))

    @jwt.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return _unauthorized("Token has been revoked")


__all__ = ["SecurityMixin", "get_current_admin_id", "register_jwt_callbacks", "revoke_token"]
