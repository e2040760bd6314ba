# solhub_admin/api/auth/routes.py
from flask import current_app, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt,
    get_jwt_identity,
    jwt_required,
)
import logging
import time

from solhub_admin.core.access_codes import normalize_code
from solhub_admin.core.exceptions import BackendError, InvalidCredentials, PermissionDenied
from solhub_admin.core.monitoring import capture_error
from solhub_admin.core.permissions import require_dashboard_admin
from solhub_admin.core.security import revoke_token
from solhub_admin.core.validation import load_json
from solhub_admin.extensions import db, limiter
from solhub_admin.services import AdminService
from . import auth_bp
from .schemas import LoginSchema, VerifyCodeSchema

logger = logging.getLogger(__name__)


def _login_limit():
    return current_app.config.get("LOGIN_RATE_LIMIT", "10 per minute")


def _claims(admin):
    return {
        "email": admin.email,
        "role": admin.role,
        "is_dashboard_admin": bool(admin.is_dashboard_admin),
    }


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(_login_limit)
@capture_error
def login():
    data = load_json(LoginSchema())
    admin = AdminService(db.session).authenticate(data["email"], data["password"])

    claims = _claims(admin)
    access_token = create_access_token(identity=admin.id, additional_claims=claims)
    refresh_token = create_refresh_token(identity=admin.id, additional_claims=claims)
    logger.info(f"Admin {admin.email} logged in")

    return jsonify(
        {
            "data": {
                "access_token": access_token,
                "refresh_token": refresh_token,
                "is_dashboard_admin": claims["is_dashboard_admin"],
                "role": admin.role,
                "user": admin.to_dict(),
            }
        }
    )


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    """Issue a new access token; the account is re-checked, not the old claims"""
    admin = AdminService(db.session).get_admin(get_jwt_identity())
    if not admin.is_active or not admin.is_dashboard_admin:
        raise PermissionDenied("Access restricted to dashboard administrators")

    access_token = create_access_token(identity=admin.id, additional_claims=_claims(admin))
    return jsonify({"data": {"access_token": access_token}})


@auth_bp.route("/logout", methods=["POST"])
@jwt_required(verify_type=False)
def logout():
    token = get_jwt()
    revoke_token(token["jti"], token["exp"] - time.time())
    return jsonify({"message": "Logged out"})


@auth_bp.route("/verify-code", methods=["POST"])
@limiter.limit(_login_limit)
def verify_code():
    """Check the shared dashboard access code"""
    expected = current_app.config.get("ADMIN_ACCESS_CODE")
    if not expected:
        logger.error("ADMIN_ACCESS_CODE is not configured")
        raise BackendError("Access code is not configured")

    data = load_json(VerifyCodeSchema())
    if normalize_code(data["code"]) != normalize_code(expected):
        raise InvalidCredentials("Invalid access code")

    return jsonify({"data": {"valid": True}})


@auth_bp.route("/me", methods=["GET"])
@require_dashboard_admin
def me():
    admin = AdminService(db.session).get_admin(get_jwt_identity())
    return jsonify({"data": admin.to_dict()})
