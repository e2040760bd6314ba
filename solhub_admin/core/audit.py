# solhub_admin/core/audit.py
from functools import wraps
from flask import request, current_app
from typing import Optional, Callable, Any, Dict
from solhub_admin.models.audit_log import AuditLog
from solhub_admin.core.security import get_current_admin_id
from solhub_admin.extensions import db


def _status_of(response) -> int:
    if isinstance(response, tuple):
        return response[1] if len(response) > 1 else 200
    return getattr(response, "status_code", 200)


def entity_id_from_response(response, view_args: Dict[str, Any]) -> Optional[str]:
    """Pull ``data.id`` out of a ``{"data": {...}}`` JSON response"""
    body = response[0] if isinstance(response, tuple) else response
    payload = body.get_json(silent=True) if hasattr(body, "get_json") else None
    data = (payload or {}).get("data")
    return data.get("id") if isinstance(data, dict) else None


def from_view_arg(name: str) -> Callable:
    return lambda response, view_args: view_args.get(name)


def audit_action(
        action: str,
        entity_type: str,
        get_entity_id: Optional[Callable] = None
):
    """
    Decorator to audit dashboard write actions.

    Args:
        action: Type of action (create, update, delete, toggle_feature, ...)
        entity_type: Type of entity being acted upon
        get_entity_id: Optional ``(response, view_args) -> id`` extractor;
            defaults to the id of the returned record
    """

    def decorator(f: Callable):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Execute the original function first; failures are not audited
            response = f(*args, **kwargs)

            if _status_of(response) >= 400:
                return response

            try:
                extractor = get_entity_id or entity_id_from_response
                AuditLog.log_action(
                    db.session,
                    action=action,
                    entity_type=entity_type,
                    entity_id=extractor(response, kwargs),
                    changes=request.get_json(silent=True) if request.is_json else None,
                    admin_id=get_current_admin_id(),
                    ip_address=request.remote_addr,
                    user_agent=request.user_agent.string,
                    endpoint=request.endpoint,
                )
            except Exception as e:
                current_app.logger.error(f"Error creating audit log: {str(e)}")
                db.session.rollback()
                # Don't re-raise - audit failure shouldn't fail the main operation

            return response

        return decorated_function

    return decorator
