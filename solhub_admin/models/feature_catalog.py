from uuid import uuid4

from solhub_admin.extensions import db
from solhub_admin.core.database import BaseModel
from solhub_admin.core.constants import FeatureCategory, RequiredPlan


class FeatureCatalog(BaseModel):
    __tablename__ = "feature_catalog"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    key = db.Column(db.String(100), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    category = db.Column(db.String(20), nullable=False, default=FeatureCategory.CORE.value)
    required_plan = db.Column(db.String(20), nullable=False, default=RequiredPlan.FREE.value)
    icon = db.Column(db.String(100))
    component_path = db.Column(db.String(255))
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    default_value = db.Column(db.Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<FeatureCatalog {self.key}>"

    def to_dict(self):
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "required_plan": self.required_plan,
            "icon": self.icon,
            "component_path": self.component_path,
            "is_active": self.is_active,
            "default_value": self.default_value,
            **self.timestamps(),
        }
