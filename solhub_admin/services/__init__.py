# solhub_admin/services/__init__.py
"""
Data access for the dashboard. Every service takes the session it works on,
so request handlers pass ``db.session`` and tests can pass their own.
"""
from .laboratory_service import LaboratoryService
from .feature_service import FeatureService
from .module_service import ModuleService
from .code_service import CodeService
from .profile_service import ProfileService
from .admin_service import AdminService
from .stats_service import StatsService

__all__ = [
    "LaboratoryService",
    "FeatureService",
    "ModuleService",
    "CodeService",
    "ProfileService",
    "AdminService",
    "StatsService",
]
