# solhub_admin/api/laboratories/routes.py
import logging
import queue

from flask import Response, current_app, json, jsonify, request

from solhub_admin.core.audit import audit_action, from_view_arg
from solhub_admin.core.code_templates import preview, template_examples, validate_template
from solhub_admin.core.constants import ALL
from solhub_admin.core.monitoring import capture_error
from solhub_admin.core.permissions import require_dashboard_admin
from solhub_admin.core.realtime import LaboratoryListReconciler
from solhub_admin.core.validation import load_json
from solhub_admin.extensions import cache, change_feed, db
from solhub_admin.services import LaboratoryService
from solhub_admin.services.stats_service import STATS_CACHE_KEY
from . import laboratories_bp
from .schemas import (
    CodeTemplatePreviewSchema,
    FeatureToggleSchema,
    LaboratorySchema,
    ModuleConfigSchema,
)

logger = logging.getLogger(__name__)


@laboratories_bp.route("", methods=["GET"])
@require_dashboard_admin
def list_laboratories():
    """List laboratories, newest first, optionally filtered by status"""
    status = request.args.get("status") or ALL
    labs = LaboratoryService(db.session).list_laboratories(status)
    return jsonify({"data": [lab.to_dict() for lab in labs]})


@laboratories_bp.route("", methods=["POST"])
@require_dashboard_admin
@capture_error
@audit_action("create", "laboratory")
def create_laboratory():
    data = load_json(LaboratorySchema())
    lab = LaboratoryService(db.session).create_laboratory(data)
    cache.delete(STATS_CACHE_KEY)
    return jsonify({"data": lab.to_dict()}), 201


@laboratories_bp.route("/<lab_id>", methods=["GET"])
@require_dashboard_admin
def get_laboratory(lab_id):
    lab = LaboratoryService(db.session).get_laboratory(lab_id)
    return jsonify({"data": lab.to_dict()})


@laboratories_bp.route("/<lab_id>", methods=["PUT", "PATCH"])
@require_dashboard_admin
@capture_error
@audit_action("update", "laboratory", from_view_arg("lab_id"))
def update_laboratory(lab_id):
    data = load_json(LaboratorySchema(), partial=True)
    lab = LaboratoryService(db.session).update_laboratory(lab_id, data)
    cache.delete(STATS_CACHE_KEY)
    return jsonify({"data": lab.to_dict()})


@laboratories_bp.route("/<lab_id>", methods=["DELETE"])
@require_dashboard_admin
@capture_error
@audit_action("delete", "laboratory", from_view_arg("lab_id"))
def delete_laboratory(lab_id):
    LaboratoryService(db.session).delete_laboratory(lab_id)
    cache.delete(STATS_CACHE_KEY)
    return jsonify({"data": {"id": lab_id}, "message": "Laboratory deleted"})


@laboratories_bp.route("/<lab_id>/features", methods=["GET"])
@require_dashboard_admin
def get_laboratory_features(lab_id):
    """Every active catalog key resolved to a boolean for this laboratory"""
    return jsonify({"data": LaboratoryService(db.session).resolved_features(lab_id)})


@laboratories_bp.route("/<lab_id>/features", methods=["PATCH"])
@require_dashboard_admin
@capture_error
@audit_action("toggle_feature", "laboratory", from_view_arg("lab_id"))
def update_laboratory_features(lab_id):
    data = load_json(FeatureToggleSchema())
    service = LaboratoryService(db.session)

    if "features" in data:
        lab = service.replace_features(lab_id, data["features"])
    else:
        lab = service.set_feature(lab_id, data["key"], data["enabled"])

    return jsonify({"data": lab.to_dict()})


@laboratories_bp.route("/<lab_id>/modules", methods=["GET"])
@require_dashboard_admin
def get_laboratory_modules(lab_id):
    """Effective configuration of every module whose feature is on"""
    return jsonify({"data": LaboratoryService(db.session).resolved_modules(lab_id)})


@laboratories_bp.route("/<lab_id>/modules/<module_name>", methods=["PUT"])
@require_dashboard_admin
@capture_error
@audit_action("configure_module", "laboratory", from_view_arg("lab_id"))
def update_laboratory_module(lab_id, module_name):
    data = load_json(ModuleConfigSchema())
    resolved = LaboratoryService(db.session).update_module_config(lab_id, module_name, data)
    return jsonify({"data": {module_name: resolved}})


@laboratories_bp.route("/code-template/preview", methods=["POST"])
@require_dashboard_admin
def preview_code_template():
    data = load_json(CodeTemplatePreviewSchema())
    is_valid, error = validate_template(data["template"])
    sample = None
    if is_valid:
        sample = preview(
            data["template"],
            code_mappings=data["code_mappings"],
            exam_type=data.get("exam_type"),
            exam_code=data.get("exam_code"),
            case_type=data["case_type"],
            counter=data["counter"],
        )

    return jsonify(
        {
            "data": {
                "valid": is_valid,
                "error": error,
                "preview": sample,
                "examples": template_examples(),
            }
        }
    )


def _sse(event, payload):
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


@laboratories_bp.route("/stream", methods=["GET"])
@require_dashboard_admin
def stream_laboratories():
    """
    Server-sent events: the filtered list once, then the reconciled list
    after every committed change that affects it.
    """
    status = request.args.get("status") or ALL
    heartbeat = current_app.config.get("STREAM_HEARTBEAT_SECONDS", 15)

    # Subscribe before reading the snapshot; replayed inserts are idempotent
    changes = queue.Queue()
    subscription = change_feed.subscribe("laboratories", changes.put)
    try:
        snapshot = [lab.to_dict() for lab in LaboratoryService(db.session).list_laboratories(status)]
    except Exception:
        subscription.unsubscribe()
        raise
    reconciler = LaboratoryListReconciler(snapshot, lambda: status)
    logger.info(f"Laboratory stream opened (status={status})")

    def generate():
        try:
            yield _sse("snapshot", {"items": reconciler.items})
            while True:
                try:
                    change = changes.get(timeout=heartbeat)
                except queue.Empty:
                    yield ": keep-alive\n\n"
                    continue
                if reconciler.apply(change):
                    yield _sse("change", {"change": change.to_dict(), "items": reconciler.items})
        finally:
            subscription.unsubscribe()
            logger.info("Laboratory stream closed")

    return Response(
        generate(),
        mimetype="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
