# solhub_admin/models/__init__.py
from .laboratory import Laboratory
from .feature_catalog import FeatureCatalog
from .module_catalog import ModuleCatalog
from .laboratory_code import LaboratoryCode
from .profile import Profile
from .admin_user import AdminUser
from .audit_log import AuditLog

__all__ = [
    "Laboratory",
    "FeatureCatalog",
    "ModuleCatalog",
    "LaboratoryCode",
    "Profile",
    "AdminUser",
    "AuditLog",
]
