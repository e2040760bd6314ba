# solhub_admin/services/module_service.py
import copy
import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select

from solhub_admin.core.exceptions import ModuleCatalogNotFoundError, ValidationFailed
from solhub_admin.models import FeatureCatalog, Laboratory, ModuleCatalog
from .base import BaseService

logger = logging.getLogger(__name__)


class ModuleService(BaseService):
    def _require_feature(self, feature_key: str):
        if not self.session.execute(select(FeatureCatalog.id).where(FeatureCatalog.key == feature_key)).first():
            raise ValidationFailed(f"Feature does not exist: {feature_key}")

    def list_modules(self, feature_key: Optional[str] = None) -> List[ModuleCatalog]:
        query = select(ModuleCatalog).order_by(ModuleCatalog.module_name)
        if feature_key:
            query = query.where(ModuleCatalog.feature_key == feature_key)
        return list(self.session.execute(query).scalars())

    def get_module(self, module_id) -> ModuleCatalog:
        module = self.session.get(ModuleCatalog, module_id)
        if module is None:
            raise ModuleCatalogNotFoundError()
        return module

    def create_module(self, data: Mapping[str, Any]) -> ModuleCatalog:
        name = data["module_name"]
        self._require_feature(data["feature_key"])
        if self.session.execute(select(ModuleCatalog.id).where(ModuleCatalog.module_name == name)).first():
            raise ValidationFailed(f"Module already exists: {name}")

        module = ModuleCatalog(
            feature_key=data["feature_key"],
            module_name=name,
            structure=copy.deepcopy(data.get("structure") or {}),
            is_active=data.get("is_active", True),
        )
        with self.unit_of_work(f"Module already exists: {name}"):
            self.session.add(module)

        logger.info(f"Created module {name} for feature {module.feature_key}")
        return module

    def update_module(self, module_id, data: Mapping[str, Any]) -> ModuleCatalog:
        with self.unit_of_work():
            module = self.get_module(module_id)
            if "module_name" in data and data["module_name"] != module.module_name:
                # Laboratory overrides are keyed by name
                raise ValidationFailed("Module name cannot be changed")
            if "feature_key" in data:
                self._require_feature(data["feature_key"])
                module.feature_key = data["feature_key"]
            if "structure" in data:
                module.structure = copy.deepcopy(data["structure"] or {})
            if "is_active" in data:
                module.is_active = data["is_active"]

        return module

    def delete_module(self, module_id):
        """Drop the module and every laboratory's stored overrides for it"""
        with self.unit_of_work():
            module = self.get_module(module_id)
            name = module.module_name
            labs = self.session.execute(select(Laboratory)).scalars().all()
            touched = 0
            for lab in labs:
                if name in lab.modules_config:
                    config = copy.deepcopy(lab.config or {})
                    config["modules"].pop(name)
                    lab.config = config
                    touched += 1
            self.session.delete(module)

        logger.info(f"Deleted module {name}; cleared overrides on {touched} laboratories")
