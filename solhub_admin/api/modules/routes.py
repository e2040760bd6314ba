# solhub_admin/api/modules/routes.py
from flask import jsonify, request

from solhub_admin.core.audit import audit_action, from_view_arg
from solhub_admin.core.monitoring import capture_error
from solhub_admin.core.permissions import require_dashboard_admin
from solhub_admin.core.validation import load_json
from solhub_admin.extensions import db
from solhub_admin.services import ModuleService
from . import modules_bp
from .schemas import ModuleSchema


@modules_bp.route("", methods=["GET"])
@require_dashboard_admin
def list_modules():
    modules = ModuleService(db.session).list_modules(request.args.get("feature_key"))
    return jsonify({"data": [module.to_dict() for module in modules]})


@modules_bp.route("", methods=["POST"])
@require_dashboard_admin
@capture_error
@audit_action("create", "module")
def create_module():
    data = load_json(ModuleSchema())
    module = ModuleService(db.session).create_module(data)
    return jsonify({"data": module.to_dict()}), 201


@modules_bp.route("/<module_id>", methods=["GET"])
@require_dashboard_admin
def get_module(module_id):
    return jsonify({"data": ModuleService(db.session).get_module(module_id).to_dict()})


@modules_bp.route("/<module_id>", methods=["PUT", "PATCH"])
@require_dashboard_admin
@capture_error
@audit_action("update", "module", from_view_arg("module_id"))
def update_module(module_id):
    data = load_json(ModuleSchema(), partial=True)
    module = ModuleService(db.session).update_module(module_id, data)
    return jsonify({"data": module.to_dict()})


@modules_bp.route("/<module_id>", methods=["DELETE"])
@require_dashboard_admin
@capture_error
@audit_action("delete", "module", from_view_arg("module_id"))
def delete_module(module_id):
    ModuleService(db.session).delete_module(module_id)
    return jsonify({"data": {"id": module_id}, "message": "Module deleted"})
