# solhub_admin/api/users/routes.py
from flask import jsonify, request

from solhub_admin.core.audit import audit_action, from_view_arg
from solhub_admin.core.monitoring import capture_error
from solhub_admin.core.permissions import require_dashboard_admin
from solhub_admin.core.validation import load_json
from solhub_admin.extensions import cache, db
from solhub_admin.services import ProfileService
from solhub_admin.services.stats_service import STATS_CACHE_KEY
from . import users_bp
from .schemas import ProfileUpdateSchema


@users_bp.route("", methods=["GET"])
@require_dashboard_admin
def list_users():
    """List user profiles across laboratories; ``all`` disables a filter"""
    profiles = ProfileService(db.session).list_profiles(
        laboratory_id=request.args.get("laboratory_id"),
        role=request.args.get("role"),
        estado=request.args.get("estado"),
        search=request.args.get("search"),
    )
    return jsonify({"data": [profile.to_dict() for profile in profiles], "total": len(profiles)})


@users_bp.route("/<profile_id>", methods=["PUT", "PATCH"])
@require_dashboard_admin
@capture_error
@audit_action("update", "profile", from_view_arg("profile_id"))
def update_user(profile_id):
    data = load_json(ProfileUpdateSchema(), partial=True)
    profile = ProfileService(db.session).update_profile(profile_id, data)
    cache.delete(STATS_CACHE_KEY)
    return jsonify({"data": profile.to_dict()})
