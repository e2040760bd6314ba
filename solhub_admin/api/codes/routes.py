# solhub_admin/api/codes/routes.py
from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity

from solhub_admin.core.audit import audit_action, from_view_arg
from solhub_admin.core.monitoring import capture_error
from solhub_admin.core.permissions import require_dashboard_admin
from solhub_admin.core.validation import load_json
from solhub_admin.extensions import db
from solhub_admin.services import CodeService
from . import codes_bp
from .schemas import AccessCodeSchema, AccessCodeUpdateSchema, GenerateCodeSchema


@codes_bp.route("", methods=["GET"])
@require_dashboard_admin
def list_codes():
    """Codes with their laboratory and derived status, newest first"""
    codes = CodeService(db.session).list_codes(
        laboratory_id=request.args.get("laboratory_id"),
        status=request.args.get("status"),
    )
    return jsonify({"data": [code.to_dict(include_laboratory=True) for code in codes]})


@codes_bp.route("", methods=["POST"])
@require_dashboard_admin
@capture_error
@audit_action("create", "laboratory_code")
def create_code():
    data = load_json(AccessCodeSchema())
    code = CodeService(db.session).create_code(data, created_by=get_jwt_identity())
    return jsonify({"data": code.to_dict(include_laboratory=True)}), 201


@codes_bp.route("/generate", methods=["POST"])
@require_dashboard_admin
def generate_code():
    """Suggest an unused code for a laboratory; nothing is stored"""
    data = load_json(GenerateCodeSchema())
    suggestion = CodeService(db.session).suggest_code(data["laboratory_id"])
    return jsonify({"data": {"code": suggestion}})


@codes_bp.route("/<code_id>", methods=["PUT", "PATCH"])
@require_dashboard_admin
@capture_error
@audit_action("update", "laboratory_code", from_view_arg("code_id"))
def update_code(code_id):
    data = load_json(AccessCodeUpdateSchema(), partial=True)
    code = CodeService(db.session).update_code(code_id, data)
    return jsonify({"data": code.to_dict(include_laboratory=True)})
