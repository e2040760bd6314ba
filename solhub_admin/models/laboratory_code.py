from uuid import uuid4

from solhub_admin.extensions import db
from solhub_admin.core.database import BaseModel
from solhub_admin.core.access_codes import code_status
from solhub_admin.core.utils import format_datetime


class LaboratoryCode(BaseModel):
    """Registration code that lets users join a laboratory"""

    __tablename__ = "laboratory_codes"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    laboratory_id = db.Column(
        db.String(36), db.ForeignKey("laboratories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    code = db.Column(db.String(100), unique=True, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    max_uses = db.Column(db.Integer, nullable=True)
    current_uses = db.Column(db.Integer, nullable=False, default=0)
    expires_at = db.Column(db.DateTime, nullable=True)
    created_by = db.Column(db.String(36), nullable=True)

    def __repr__(self):
        return f"<LaboratoryCode {self.code}>"

    @property
    def status(self):
        return code_status(self)

    def to_dict(self, include_laboratory=False):
        data = {
            "id": self.id,
            "laboratory_id": self.laboratory_id,
            "code": self.code,
            "is_active": self.is_active,
            "max_uses": self.max_uses,
            "current_uses": self.current_uses,
            "expires_at": format_datetime(self.expires_at),
            "created_by": self.created_by,
            "status": self.status.value,
            **self.timestamps(),
        }
        if include_laboratory:
            data["laboratory"] = self.laboratory.summary() if self.laboratory else None
        return data
