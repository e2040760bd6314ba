# solhub_admin/models/admin_user.py
from uuid import uuid4

from solhub_admin.extensions import db
from solhub_admin.core.database import BaseModel
from solhub_admin.core.security import SecurityMixin
from solhub_admin.core.constants import AdminRole
from solhub_admin.core.utils import utcnow, format_datetime


class AdminUser(BaseModel, SecurityMixin):
    """Operator account allowed (or not) into the admin dashboard"""

    __tablename__ = "admin_users"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255))
    role = db.Column(db.String(20), nullable=False, default=AdminRole.SUPPORT.value)
    is_dashboard_admin = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime)

    def __repr__(self):
        return f"<AdminUser {self.email}>"

    def update_last_login(self):
        self.last_login = utcnow()

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "is_dashboard_admin": self.is_dashboard_admin,
            "is_active": self.is_active,
            "last_login": format_datetime(self.last_login),
            **self.timestamps(),
        }
