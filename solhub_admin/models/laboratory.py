# solhub_admin/models/laboratory.py
import copy
from uuid import uuid4

from solhub_admin.extensions import db
from solhub_admin.core.database import BaseModel
from solhub_admin.core.constants import DEFAULT_BRANDING, DEFAULT_CONFIG, LaboratoryStatus


class Laboratory(BaseModel):
    """A tenant organization of the platform"""

    __tablename__ = "laboratories"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    slug = db.Column(db.String(100), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=LaboratoryStatus.ACTIVE.value)
    branding = db.Column(db.JSON, nullable=False, default=lambda: copy.deepcopy(DEFAULT_BRANDING))
    config = db.Column(db.JSON, nullable=False, default=lambda: copy.deepcopy(DEFAULT_CONFIG))
    features = db.Column(db.JSON, nullable=False, default=dict)

    codes = db.relationship(
        "LaboratoryCode", backref="laboratory", lazy="select", cascade="all, delete-orphan"
    )
    profiles = db.relationship("Profile", backref="laboratory", lazy="dynamic", passive_deletes=True)

    def __repr__(self):
        return f"<Laboratory {self.slug}>"

    @property
    def modules_config(self):
        return (self.config or {}).get("modules") or {}

    def summary(self):
        return {"id": self.id, "name": self.name, "slug": self.slug}

    def to_dict(self):
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "status": self.status,
            "branding": self.branding or {},
            "config": self.config or {},
            "features": self.features or {},
            **self.timestamps(),
        }
