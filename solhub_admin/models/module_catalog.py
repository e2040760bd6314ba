from uuid import uuid4

from solhub_admin.extensions import db
from solhub_admin.core.database import BaseModel


class ModuleCatalog(BaseModel):
    """
    A configurable unit gated behind a feature flag.

    ``structure`` holds the template every laboratory override is resolved
    against::

        {
            "fields": {"cedula": {"label": "Cedula", "defaultEnabled": true, "defaultRequired": false}},
            "actions": {"generatePdf": {"label": "Generate PDF", "defaultEnabled": true}},
            "settings": {}
        }
    """

    __tablename__ = "module_catalog"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    feature_key = db.Column(db.String(100), nullable=False, index=True)
    module_name = db.Column(db.String(100), unique=True, nullable=False)
    structure = db.Column(db.JSON, nullable=False, default=dict)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<ModuleCatalog {self.module_name} ({self.feature_key})>"

    def to_dict(self):
        return {
            "id": self.id,
            "feature_key": self.feature_key,
            "module_name": self.module_name,
            "structure": self.structure or {},
            "is_active": self.is_active,
            **self.timestamps(),
        }
