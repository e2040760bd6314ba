# tests/unit/core/test_modules.py
import pytest

from solhub_admin.core.exceptions import ValidationFailed
from solhub_admin.core.modules import (
    normalize_module_config,
    resolve_action,
    resolve_field,
    resolve_laboratory_modules,
    resolve_module,
)

STRUCTURE = {
    "fields": {
        "email": {"label": "Email", "defaultEnabled": True, "defaultRequired": False},
        "phone": {"label": "Phone", "defaultEnabled": True, "defaultRequired": True},
        "notes": {"label": "Notes", "defaultEnabled": False, "defaultRequired": False},
    },
    "actions": {
        "generatePdf": {"label": "Generate PDF", "defaultEnabled": True},
        "sendEmail": {"label": "Send email", "defaultEnabled": False},
    },
    "settings": {"maxItems": 50},
}


def test_absent_field_uses_template_defaults():
    resolved = resolve_field(STRUCTURE["fields"]["phone"], None)

    assert resolved["enabled"] is True
    assert resolved["required"] is True


def test_bare_true_enables_and_keeps_default_required():
    resolved = resolve_field(STRUCTURE["fields"]["phone"], True)

    assert resolved == {"enabled": True, "required": True, "effective_required": True}


def test_bare_false_disables_field():
    resolved = resolve_field(STRUCTURE["fields"]["phone"], False)

    assert resolved["enabled"] is False
    assert resolved["required"] is True
    assert resolved["effective_required"] is False


def test_object_override_falls_back_per_key():
    resolved = resolve_field(STRUCTURE["fields"]["phone"], {"enabled": False})

    assert resolved["enabled"] is False
    assert resolved["required"] is True


def test_required_on_disabled_field_is_reported_but_not_effective():
    resolved = resolve_field(STRUCTURE["fields"]["email"], {"enabled": False, "required": True})

    assert resolved["required"] is True
    assert resolved["effective_required"] is False


def test_action_uses_stored_boolean_or_default():
    assert resolve_action(STRUCTURE["actions"]["generatePdf"], None) is True
    assert resolve_action(STRUCTURE["actions"]["generatePdf"], False) is False
    assert resolve_action(STRUCTURE["actions"]["sendEmail"], True) is True


def test_resolve_module_ignores_stored_entries_missing_from_template():
    stored = {"fields": {"email": False, "ghost": True}, "actions": {"ghostAction": True}}
    resolved = resolve_module(STRUCTURE, stored)

    assert set(resolved["fields"]) == {"email", "phone", "notes"}
    assert set(resolved["actions"]) == {"generatePdf", "sendEmail"}
    assert resolved["fields"]["email"]["enabled"] is False
    assert resolved["settings"] == {"maxItems": 50}


def test_only_modules_with_enabled_feature_are_resolved():
    catalog = [
        {"module_name": "inventoryForm", "feature_key": "hasInventory", "structure": STRUCTURE, "is_active": True},
        {"module_name": "chatPanel", "feature_key": "hasChatAI", "structure": STRUCTURE, "is_active": True},
        {"module_name": "oldForm", "feature_key": "hasInventory", "structure": STRUCTURE, "is_active": False},
    ]
    stored = {"chatPanel": {"fields": {"email": False}}}

    resolved = resolve_laboratory_modules(catalog, {"hasInventory": True, "hasChatAI": False}, stored)

    assert list(resolved) == ["inventoryForm"]
    assert resolved["inventoryForm"]["feature_key"] == "hasInventory"


def test_normalize_clears_required_on_disabled_fields():
    normalized = normalize_module_config(
        STRUCTURE,
        {"fields": {"phone": {"enabled": False, "required": True}, "email": True}, "actions": {"sendEmail": True}},
    )

    assert normalized["fields"]["phone"] == {"enabled": False, "required": False}
    assert normalized["fields"]["email"] == {"enabled": True, "required": False}
    assert normalized["actions"] == {"sendEmail": True}


@pytest.mark.parametrize(
    "payload",
    [
        {"fields": {"ghost": True}},
        {"actions": {"ghostAction": True}},
        {"fields": {"email": "yes"}},
        {"actions": {"generatePdf": "no"}},
    ],
)
def test_normalize_rejects_unknown_or_malformed_entries(payload):
    with pytest.raises(ValidationFailed):
        normalize_module_config(STRUCTURE, payload)
