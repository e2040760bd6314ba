# solhub_admin/api/features/routes.py
import logging

from flask import jsonify, request

from solhub_admin.core.audit import audit_action, from_view_arg
from solhub_admin.core.monitoring import capture_error
from solhub_admin.core.permissions import require_dashboard_admin
from solhub_admin.core.validation import load_json
from solhub_admin.extensions import db
from solhub_admin.services import FeatureService
from . import features_bp
from .schemas import FeatureSchema

logger = logging.getLogger(__name__)


@features_bp.route("", methods=["GET"])
@require_dashboard_admin
def list_features():
    """Active catalog entries; ``?active=false`` includes inactive ones"""
    include_inactive = request.args.get("active", "true").lower() == "false"
    features = FeatureService(db.session).list_features(include_inactive=include_inactive)
    return jsonify({"data": [feature.to_dict() for feature in features]})


@features_bp.route("", methods=["POST"])
@require_dashboard_admin
@capture_error
@audit_action("create", "feature")
def create_feature():
    data = load_json(FeatureSchema())
    feature = FeatureService(db.session).create_feature(data)
    return jsonify({"data": feature.to_dict()}), 201


@features_bp.route("/types", methods=["GET"])
@require_dashboard_admin
def feature_types():
    """TypeScript interfaces for client apps, built from the active catalog"""
    content = FeatureService(db.session).typescript_types()
    return jsonify({"data": {"filename": "laboratory.ts", "content": content}})


@features_bp.route("/<feature_id>", methods=["GET"])
@require_dashboard_admin
def get_feature(feature_id):
    feature = FeatureService(db.session).get_feature(feature_id)
    return jsonify({"data": feature.to_dict()})


@features_bp.route("/<feature_id>", methods=["PUT", "PATCH"])
@require_dashboard_admin
@capture_error
@audit_action("update", "feature", from_view_arg("feature_id"))
def update_feature(feature_id):
    data = load_json(FeatureSchema(), partial=True)
    feature = FeatureService(db.session).update_feature(feature_id, data)
    return jsonify({"data": feature.to_dict()})


@features_bp.route("/<feature_id>", methods=["DELETE"])
@require_dashboard_admin
@capture_error
@audit_action("delete", "feature", from_view_arg("feature_id"))
def delete_feature(feature_id):
    FeatureService(db.session).delete_feature(feature_id)
    return jsonify({"data": {"id": feature_id}, "message": "Feature deleted"})
