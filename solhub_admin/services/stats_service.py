# solhub_admin/services/stats_service.py
from sqlalchemy import func, select

from solhub_admin.core.constants import LaboratoryStatus
from solhub_admin.models import Laboratory, Profile
from .base import BaseService

STATS_CACHE_KEY = "dashboard_stats"


class StatsService(BaseService):
    def dashboard_stats(self):
        total_labs = self.session.scalar(select(func.count()).select_from(Laboratory))
        active_labs = self.session.scalar(
            select(func.count())
            .select_from(Laboratory)
            .where(Laboratory.status == LaboratoryStatus.ACTIVE.value)
        )
        total_users = self.session.scalar(select(func.count()).select_from(Profile))
        return {
            "totalLabs": total_labs or 0,
            "activeLabs": active_labs or 0,
            "totalUsers": total_users or 0,
        }
