# solhub_admin/services/laboratory_service.py
import copy
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select

from solhub_admin.core.constants import ALL, DEFAULT_BRANDING, DEFAULT_CONFIG, LaboratoryStatus
from solhub_admin.core.exceptions import (
    LaboratoryNotFoundError,
    ModuleCatalogNotFoundError,
    ValidationFailed,
)
from solhub_admin.core.features import count_enabled, resolve_features, toggle_feature, active_keys
from solhub_admin.core.modules import normalize_module_config, resolve_laboratory_modules, resolve_module
from solhub_admin.models import FeatureCatalog, Laboratory, ModuleCatalog
from .base import BaseService

logger = logging.getLogger(__name__)

WEBHOOK_KEYS = ("generateDoc", "generatePdf", "sendEmail")


def _clean_list(values, label: str) -> List[str]:
    if values is None:
        values = []
    if not isinstance(values, list):
        raise ValidationFailed(f"{label} must be a list")

    cleaned = []
    for value in values:
        if not isinstance(value, str):
            raise ValidationFailed(f"{label} entries must be text")
        value = value.strip()
        if not value:
            continue
        if value in cleaned:
            raise ValidationFailed(f"Duplicate entry in {label}: {value}")
        cleaned.append(value)

    if not cleaned:
        raise ValidationFailed(f"At least one entry is required in {label}")
    return cleaned


def normalize_config(payload: Optional[Mapping[str, Any]], existing: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge a config payload over the stored config and validate the result.

    Branches and payment methods are trimmed, blank entries dropped and
    duplicates rejected. Empty webhook URLs are removed. Stored module
    configuration is kept unless the payload carries its own.
    """
    existing = copy.deepcopy(dict(existing or DEFAULT_CONFIG))
    payload = copy.deepcopy(dict(payload or {}))

    config = {**existing, **payload}
    config["branches"] = _clean_list(config.get("branches"), "branches")
    config["paymentMethods"] = _clean_list(config.get("paymentMethods"), "paymentMethods")

    rate = config.get("defaultExchangeRate", DEFAULT_CONFIG["defaultExchangeRate"])
    if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate < 0:
        raise ValidationFailed("defaultExchangeRate must be a non-negative number")
    config["defaultExchangeRate"] = rate

    if not config.get("timezone"):
        config["timezone"] = DEFAULT_CONFIG["timezone"]

    webhooks = {
        key: url.strip()
        for key, url in (config.get("webhooks") or {}).items()
        if key in WEBHOOK_KEYS and isinstance(url, str) and url.strip()
    }
    if webhooks:
        config["webhooks"] = webhooks
    else:
        config.pop("webhooks", None)

    if "modules" not in payload:
        config["modules"] = existing.get("modules") or {}

    return config


class LaboratoryService(BaseService):
    """Laboratories plus their feature map and module overrides"""

    def _catalog(self) -> List[Dict[str, Any]]:
        entries = self.session.execute(
            select(FeatureCatalog).order_by(FeatureCatalog.category, FeatureCatalog.name)
        ).scalars()
        return [entry.to_dict() for entry in entries]

    def _module_catalog(self) -> List[Dict[str, Any]]:
        entries = self.session.execute(select(ModuleCatalog).order_by(ModuleCatalog.module_name)).scalars()
        return [entry.to_dict() for entry in entries]

    def _locked(self, lab_id) -> Laboratory:
        """Load a laboratory with a row lock held until the transaction ends"""
        lab = self.session.execute(
            select(Laboratory)
            .where(Laboratory.id == lab_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if lab is None:
            raise LaboratoryNotFoundError()
        return lab

    def list_laboratories(self, status: Optional[str] = None) -> List[Laboratory]:
        query = select(Laboratory).order_by(Laboratory.created_at.desc())
        if status and status != ALL:
            query = query.where(Laboratory.status == status)
        return list(self.session.execute(query).scalars())

    def get_laboratory(self, lab_id) -> Laboratory:
        lab = self.session.get(Laboratory, lab_id)
        if lab is None:
            raise LaboratoryNotFoundError()
        return lab

    def create_laboratory(self, data: Mapping[str, Any]) -> Laboratory:
        slug = data["slug"]
        if self.session.execute(select(Laboratory.id).where(Laboratory.slug == slug)).first():
            raise ValidationFailed(f"Slug already in use: {slug}")

        features = {entry["key"]: False for entry in self._catalog()}

        lab = Laboratory(
            slug=slug,
            name=data["name"],
            status=data.get("status") or LaboratoryStatus.ACTIVE.value,
            branding={**copy.deepcopy(DEFAULT_BRANDING), **(data.get("branding") or {})},
            config=normalize_config(data.get("config"), DEFAULT_CONFIG),
            features=features,
        )

        with self.unit_of_work(f"Slug already in use: {slug}"):
            self.session.add(lab)

        logger.info(f"Created laboratory {slug}", extra={"laboratory_id": lab.id})
        return lab

    def update_laboratory(self, lab_id, data: Mapping[str, Any]) -> Laboratory:
        with self.unit_of_work():
            lab = self._locked(lab_id)

            if "slug" in data and data["slug"] != lab.slug:
                raise ValidationFailed("Slug cannot be changed once set")

            if "name" in data:
                lab.name = data["name"]
            if "status" in data:
                lab.status = data["status"]
            if "branding" in data:
                lab.branding = {**(lab.branding or {}), **(data["branding"] or {})}
            if "config" in data:
                lab.config = normalize_config(data["config"], lab.config)

        logger.info(f"Updated laboratory {lab_id}", extra={"laboratory_id": lab_id})
        return lab

    def delete_laboratory(self, lab_id):
        with self.unit_of_work():
            lab = self._locked(lab_id)
            self.session.delete(lab)

        logger.info(f"Deleted laboratory {lab_id}", extra={"laboratory_id": lab_id})

    # Feature flags

    def set_feature(self, lab_id, key: str, enabled: bool) -> Laboratory:
        """Flip one key under a row lock so concurrent toggles of other keys survive"""
        if not isinstance(enabled, bool):
            raise ValidationFailed("enabled must be a boolean")

        with self.unit_of_work():
            lab = self._locked(lab_id)
            if not self.session.execute(select(FeatureCatalog.id).where(FeatureCatalog.key == key)).first():
                raise ValidationFailed(f"Unknown feature: {key}")
            lab.features = toggle_feature(lab.features, key, enabled)

        logger.info(f"Feature {key} set to {enabled}", extra={"laboratory_id": lab_id})
        return lab

    def replace_features(self, lab_id, features: Mapping[str, Any]) -> Laboratory:
        if not isinstance(features, Mapping):
            raise ValidationFailed("features must be an object")

        with self.unit_of_work():
            lab = self._locked(lab_id)
            known = {entry["key"] for entry in self._catalog()}
            for key, value in features.items():
                if key not in known:
                    raise ValidationFailed(f"Unknown feature: {key}")
                if not isinstance(value, bool):
                    raise ValidationFailed(f"Feature {key} must be a boolean")
            lab.features = dict(features)

        return lab

    def resolved_features(self, lab_id) -> Dict[str, Any]:
        lab = self.get_laboratory(lab_id)
        catalog = self._catalog()
        return {
            "laboratory_id": lab.id,
            "features": resolve_features(catalog, lab.features),
            "enabled": count_enabled(catalog, lab.features),
            "total": len(active_keys(catalog)),
        }

    # Module configuration

    def resolved_modules(self, lab_id) -> Dict[str, Any]:
        lab = self.get_laboratory(lab_id)
        return resolve_laboratory_modules(self._module_catalog(), lab.features, lab.modules_config)

    def update_module_config(self, lab_id, module_name: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Store overrides for one module; partial payloads merge into what is stored"""
        module = self.session.execute(
            select(ModuleCatalog).where(ModuleCatalog.module_name == module_name)
        ).scalar_one_or_none()
        if module is None:
            raise ModuleCatalogNotFoundError(f"Module not found: {module_name}")
        structure = module.structure or {}
        feature_key = module.feature_key

        with self.unit_of_work():
            lab = self._locked(lab_id)
            if (lab.features or {}).get(feature_key) is not True:
                raise ValidationFailed(f"Feature {feature_key} is not enabled for this laboratory")

            normalized = normalize_module_config(structure, payload)
            stored = lab.modules_config.get(module_name) or {}
            merged = {
                "fields": {**(stored.get("fields") or {}), **normalized["fields"]},
                "actions": {**(stored.get("actions") or {}), **normalized["actions"]},
                "settings": {**(stored.get("settings") or {}), **normalized["settings"]},
            }

            config = copy.deepcopy(lab.config or {})
            config["modules"] = {**(config.get("modules") or {}), module_name: merged}
            lab.config = config

        logger.info(f"Updated module {module_name}", extra={"laboratory_id": lab_id})
        return {"feature_key": feature_key, **resolve_module(structure, merged)}
