from uuid import uuid4

from solhub_admin.extensions import db
from solhub_admin.core.database import BaseModel


class Profile(BaseModel):
    """A platform user belonging to one laboratory"""

    __tablename__ = "profiles"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    email = db.Column(db.String(255), nullable=False)
    display_name = db.Column(db.String(255))
    role = db.Column(db.String(50), nullable=False, default="employee")
    estado = db.Column(db.String(50), nullable=False, default="pendiente")
    assigned_branch = db.Column(db.String(100))
    laboratory_id = db.Column(
        db.String(36), db.ForeignKey("laboratories.id", ondelete="CASCADE"), nullable=False, index=True
    )

    def __repr__(self):
        return f"<Profile {self.email}>"

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "role": self.role,
            "estado": self.estado,
            "assigned_branch": self.assigned_branch,
            "laboratory_id": self.laboratory_id,
            "laboratory": (
                {"name": self.laboratory.name, "slug": self.laboratory.slug}
                if self.laboratory
                else None
            ),
            **self.timestamps(),
        }
