# tests/unit/services/test_laboratory_service.py
import pytest
from sqlalchemy.exc import OperationalError

from solhub_admin.core.constants import DEFAULT_CONFIG
from solhub_admin.core.exceptions import (
    BackendError,
    LaboratoryNotFoundError,
    ValidationFailed,
)
from solhub_admin.extensions import db
from solhub_admin.models import Laboratory
from solhub_admin.services import FeatureService, LaboratoryService
from solhub_admin.services.laboratory_service import normalize_config


class TestNormalizeConfig:
    def test_defaults_fill_missing_keys(self):
        config = normalize_config({}, DEFAULT_CONFIG)

        assert config == DEFAULT_CONFIG

    def test_lists_are_trimmed_and_blank_entries_dropped(self):
        config = normalize_config({"branches": [" Norte", "", "Sur "], "paymentMethods": ["Zelle"]})

        assert config["branches"] == ["Norte", "Sur"]
        assert config["paymentMethods"] == ["Zelle"]

    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"branches": "Norte"}, "branches must be a list"),
            ({"branches": [1]}, "branches entries must be text"),
            ({"paymentMethods": []}, "At least one entry is required in paymentMethods"),
            ({"defaultExchangeRate": -1}, "defaultExchangeRate must be a non-negative number"),
            ({"defaultExchangeRate": True}, "defaultExchangeRate must be a non-negative number"),
        ],
    )
    def test_invalid_config(self, payload, message):
        with pytest.raises(ValidationFailed) as exc:
            normalize_config(payload, DEFAULT_CONFIG)

        assert exc.value.message == message

    def test_blank_timezone_falls_back_to_default(self):
        assert normalize_config({"timezone": ""})["timezone"] == "America/Caracas"

    def test_unknown_webhooks_are_dropped(self):
        config = normalize_config({"webhooks": {"generateDoc": "https://hooks.test/doc", "deploy": "https://x"}})

        assert config["webhooks"] == {"generateDoc": "https://hooks.test/doc"}

    def test_empty_webhooks_are_removed(self):
        existing = dict(DEFAULT_CONFIG, webhooks={"sendEmail": "https://hooks.test/mail"})

        config = normalize_config({"webhooks": {"sendEmail": "  "}}, existing)

        assert "webhooks" not in config

    def test_stored_modules_survive_unrelated_updates(self):
        existing = dict(DEFAULT_CONFIG, modules={"inventoryForm": {"fields": {"email": {"enabled": False}}}})

        config = normalize_config({"timezone": "America/Bogota"}, existing)

        assert config["modules"] == existing["modules"]
        assert config["timezone"] == "America/Bogota"

    def test_extra_keys_pass_through(self):
        config = normalize_config({"codeTemplate": "{type}{counter:3}"}, DEFAULT_CONFIG)

        assert config["codeTemplate"] == "{type}{counter:3}"


class TestLaboratoryService:
    def test_new_laboratory_gets_every_catalog_key(self, app, feature_catalog):
        lab = LaboratoryService(db.session).create_laboratory({"slug": "lab-vargas", "name": "Lab Vargas"})

        assert set(lab.features) == {"hasChatAI", "hasInventory", "hasLegacyReports"}
        assert not any(lab.features.values())

    def test_catalog_fan_out_reaches_existing_laboratories(self, app, laboratory):
        FeatureService(db.session).create_feature({"key": "hasBilling", "name": "Billing"})

        assert db.session.get(Laboratory, laboratory.id).features["hasBilling"] is False

    def test_set_feature_on_missing_laboratory(self, app, feature_catalog):
        with pytest.raises(LaboratoryNotFoundError):
            LaboratoryService(db.session).set_feature("missing", "hasChatAI", True)

    def test_set_feature_requires_boolean(self, app, laboratory):
        with pytest.raises(ValidationFailed) as exc:
            LaboratoryService(db.session).set_feature(laboratory.id, "hasChatAI", "yes")

        assert exc.value.message == "enabled must be a boolean"

    def test_failed_toggle_leaves_row_unchanged(self, app, laboratory):
        service = LaboratoryService(db.session)

        with pytest.raises(ValidationFailed):
            service.set_feature(laboratory.id, "hasNothing", True)

        assert service.get_laboratory(laboratory.id).features["hasInventory"] is True

    def test_database_errors_surface_as_backend_errors(self, app, laboratory, monkeypatch):
        def broken_commit():
            raise OperationalError("UPDATE laboratories", {}, Exception("connection reset"))

        monkeypatch.setattr(db.session, "commit", broken_commit)

        with pytest.raises(BackendError) as exc:
            LaboratoryService(db.session).set_feature(laboratory.id, "hasChatAI", True)

        assert "connection reset" in exc.value.message
        assert exc.value.status_code == 500

    def test_resolved_modules_follow_feature_toggles(self, app, laboratory, module_catalog):
        service = LaboratoryService(db.session)
        assert list(service.resolved_modules(laboratory.id)) == ["inventoryForm"]

        service.set_feature(laboratory.id, "hasChatAI", True)

        assert list(service.resolved_modules(laboratory.id)) == ["chatPanel", "inventoryForm"]
