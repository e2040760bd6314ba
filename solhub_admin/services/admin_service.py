# solhub_admin/services/admin_service.py
import logging

from sqlalchemy import func, select

from solhub_admin.core.constants import AdminRole
from solhub_admin.core.exceptions import InvalidCredentials, PermissionDenied, ValidationFailed
from solhub_admin.models import AdminUser
from .base import BaseService

logger = logging.getLogger(__name__)


class AdminService(BaseService):
    """Dashboard operator accounts"""

    def find_by_email(self, email: str):
        return self.session.execute(
            select(AdminUser).where(func.lower(AdminUser.email) == email.strip().lower())
        ).scalar_one_or_none()

    def get_admin(self, admin_id):
        admin = self.session.get(AdminUser, admin_id)
        if admin is None:
            raise InvalidCredentials("Account no longer exists")
        return admin

    def authenticate(self, email: str, password: str) -> AdminUser:
        """
        Check credentials first, then the dashboard flag. A correct password
        on an account without the flag is still refused.
        """
        admin = self.find_by_email(email)
        if admin is None or not admin.verify_password(password):
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentials()

        if not admin.is_active:
            logger.warning(f"Inactive account tried to log in: {email}")
            raise PermissionDenied("Account is inactive")
        if not admin.is_dashboard_admin:
            logger.warning(f"Non-admin account tried to log in: {email}")
            raise PermissionDenied("Access restricted to dashboard administrators")

        with self.unit_of_work():
            admin.update_last_login()

        return admin

    def create_admin(self, email: str, password: str, role: str = AdminRole.SUPERADMIN.value) -> AdminUser:
        email = email.strip().lower()
        if role not in {r.value for r in AdminRole}:
            raise ValidationFailed(f"Unknown role: {role}")
        if self.find_by_email(email):
            raise ValidationFailed(f"Admin already exists: {email}")

        admin = AdminUser(email=email, role=role, is_dashboard_admin=True, is_active=True)
        admin.password = password
        with self.unit_of_work(f"Admin already exists: {email}"):
            self.session.add(admin)

        logger.info(f"Created dashboard admin {email} ({role})")
        return admin
