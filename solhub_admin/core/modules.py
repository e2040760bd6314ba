# solhub_admin/core/modules.py
"""
Effective module configuration for a laboratory.

A module's structure template supplies defaults; the laboratory stores
overrides under ``config.modules[module_name]``::

    {"fields": {"email": {"enabled": true, "required": false}, "phone": false},
     "actions": {"generatePdf": false}}

Field overrides may be the legacy bare boolean, which only sets ``enabled``.
"""
from typing import Any, Dict, Iterable, Mapping, Optional

from .exceptions import ValidationFailed


def resolve_field(definition: Mapping[str, Any], stored: Any) -> Dict[str, bool]:
    default_enabled = bool(definition.get("defaultEnabled", False))
    default_required = bool(definition.get("defaultRequired", False))

    if isinstance(stored, Mapping):
        enabled = stored.get("enabled", default_enabled)
        required = stored.get("required", default_required)
    elif isinstance(stored, bool):
        enabled, required = stored, default_required
    else:
        enabled, required = default_enabled, default_required

    return {
        "enabled": bool(enabled),
        "required": bool(required),
        "effective_required": bool(enabled) and bool(required),
    }


def resolve_action(definition: Mapping[str, Any], stored: Any) -> bool:
    if isinstance(stored, bool):
        return stored
    return bool(definition.get("defaultEnabled", False))


def resolve_module(structure: Optional[Mapping[str, Any]], stored: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    structure = structure or {}
    stored = stored or {}
    stored_fields = stored.get("fields") or {}
    stored_actions = stored.get("actions") or {}

    fields = {
        name: resolve_field(definition or {}, stored_fields.get(name))
        for name, definition in (structure.get("fields") or {}).items()
    }
    actions = {
        name: resolve_action(definition or {}, stored_actions.get(name))
        for name, definition in (structure.get("actions") or {}).items()
    }
    return {"fields": fields, "actions": actions, "settings": structure.get("settings") or {}}


def resolve_laboratory_modules(
    module_catalog: Iterable[Mapping[str, Any]],
    features: Optional[Mapping[str, Any]],
    modules_config: Optional[Mapping[str, Any]],
) -> Dict[str, Dict[str, Any]]:
    """
    Resolve every active module whose feature is switched on.

    Stored configuration of modules whose feature is off is kept in the
    laboratory row but not surfaced here.
    """
    features = features or {}
    modules_config = modules_config or {}
    resolved = {}
    for module in module_catalog:
        if not module.get("is_active", True):
            continue
        if features.get(module["feature_key"]) is not True:
            continue
        name = module["module_name"]
        resolved[name] = {
            "feature_key": module["feature_key"],
            **resolve_module(module.get("structure"), modules_config.get(name)),
        }
    return resolved


def normalize_module_config(structure: Optional[Mapping[str, Any]], payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate an override payload against the template and bring it to storage form.

    Bare-boolean fields become objects, ``required`` is cleared on disabled
    fields and unknown field or action names are rejected.
    """
    structure = structure or {}
    field_defs = structure.get("fields") or {}
    action_defs = structure.get("actions") or {}

    fields = {}
    for name, value in (payload.get("fields") or {}).items():
        if name not in field_defs:
            raise ValidationFailed(f"Unknown field: {name}")
        if not isinstance(value, (bool, Mapping)):
            raise ValidationFailed(f"Field {name} must be a boolean or an object")
        resolved = resolve_field(field_defs[name] or {}, value)
        fields[name] = {"enabled": resolved["enabled"], "required": resolved["effective_required"]}

    actions = {}
    for name, value in (payload.get("actions") or {}).items():
        if name not in action_defs:
            raise ValidationFailed(f"Unknown action: {name}")
        if not isinstance(value, bool):
            raise ValidationFailed(f"Action {name} must be a boolean")
        actions[name] = value

    return {"fields": fields, "actions": actions, "settings": dict(payload.get("settings") or {})}
