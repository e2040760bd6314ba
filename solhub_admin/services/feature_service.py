# solhub_admin/services/feature_service.py
import logging
from typing import Any, List, Mapping

from sqlalchemy import select

from solhub_admin.core.exceptions import FeatureNotFoundError, ValidationFailed
from solhub_admin.core.features import add_feature_key, remove_feature_key
from solhub_admin.core.typegen import generate_typescript
from solhub_admin.models import FeatureCatalog, Laboratory
from .base import BaseService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description", "category", "required_plan", "icon", "component_path", "is_active")


class FeatureService(BaseService):
    """
    The global feature catalog.

    Creating or deleting an entry also rewrites every laboratory's feature
    map; both happen in the same transaction.
    """

    def list_features(self, include_inactive: bool = True) -> List[FeatureCatalog]:
        query = select(FeatureCatalog).order_by(FeatureCatalog.category, FeatureCatalog.name)
        if not include_inactive:
            query = query.where(FeatureCatalog.is_active.is_(True))
        return list(self.session.execute(query).scalars())

    def get_feature(self, feature_id) -> FeatureCatalog:
        feature = self.session.get(FeatureCatalog, feature_id)
        if feature is None:
            raise FeatureNotFoundError()
        return feature

    def create_feature(self, data: Mapping[str, Any]) -> FeatureCatalog:
        key = data["key"]
        if self.session.execute(select(FeatureCatalog.id).where(FeatureCatalog.key == key)).first():
            raise ValidationFailed(f"Feature key already exists: {key}")

        feature = FeatureCatalog(
            key=key,
            name=data["name"],
            description=data.get("description"),
            category=data.get("category") or "core",
            required_plan=data.get("required_plan") or "free",
            icon=data.get("icon"),
            component_path=data.get("component_path"),
            is_active=True,
            default_value=False,
        )

        with self.unit_of_work(f"Feature key already exists: {key}"):
            self.session.add(feature)
            labs = self.session.execute(select(Laboratory)).scalars().all()
            for lab in labs:
                lab.features = add_feature_key(lab.features, key)

        logger.info(f"Created feature {key} and added it to {len(labs)} laboratories")
        return feature

    def update_feature(self, feature_id, data: Mapping[str, Any]) -> FeatureCatalog:
        with self.unit_of_work():
            feature = self.get_feature(feature_id)
            if "key" in data and data["key"] != feature.key:
                raise ValidationFailed("Feature key cannot be changed")
            for name in UPDATABLE_FIELDS:
                if name in data:
                    setattr(feature, name, data[name])

        return feature

    def delete_feature(self, feature_id):
        with self.unit_of_work():
            feature = self.get_feature(feature_id)
            key = feature.key
            labs = self.session.execute(select(Laboratory)).scalars().all()
            for lab in labs:
                if key in (lab.features or {}):
                    lab.features = remove_feature_key(lab.features, key)
            self.session.delete(feature)

        logger.info(f"Deleted feature {key} from catalog and {len(labs)} laboratories")

    def typescript_types(self) -> str:
        catalog = [feature.to_dict() for feature in self.list_features(include_inactive=False)]
        try:
            return generate_typescript(catalog)
        except ValueError as e:
            raise ValidationFailed(str(e))
