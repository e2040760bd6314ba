# solhub_admin/services/profile_service.py
from typing import Any, List, Mapping, Optional

from sqlalchemy import or_, select

from solhub_admin.core.constants import ALL
from solhub_admin.core.exceptions import LaboratoryNotFoundError, ProfileNotFoundError
from solhub_admin.models import Laboratory, Profile
from .base import BaseService

UPDATABLE_FIELDS = ("display_name", "role", "estado", "assigned_branch")


def _active_filter(value: Optional[str]) -> Optional[str]:
    return None if not value or value == ALL else value


class ProfileService(BaseService):
    def list_profiles(
        self,
        laboratory_id: Optional[str] = None,
        role: Optional[str] = None,
        estado: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Profile]:
        query = (
            select(Profile)
            .outerjoin(Laboratory, Profile.laboratory_id == Laboratory.id)
            .order_by(Profile.created_at.desc())
        )

        if _active_filter(laboratory_id):
            query = query.where(Profile.laboratory_id == laboratory_id)
        if _active_filter(role):
            query = query.where(Profile.role == role)
        if _active_filter(estado):
            query = query.where(Profile.estado == estado)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Profile.email.ilike(pattern),
                    Profile.display_name.ilike(pattern),
                    Laboratory.name.ilike(pattern),
                )
            )

        return list(self.session.execute(query).scalars())

    def get_profile(self, profile_id) -> Profile:
        profile = self.session.get(Profile, profile_id)
        if profile is None:
            raise ProfileNotFoundError()
        return profile

    def update_profile(self, profile_id, data: Mapping[str, Any]) -> Profile:
        with self.unit_of_work():
            profile = self.get_profile(profile_id)
            if "laboratory_id" in data and data["laboratory_id"] != profile.laboratory_id:
                if self.session.get(Laboratory, data["laboratory_id"]) is None:
                    raise LaboratoryNotFoundError()
                profile.laboratory_id = data["laboratory_id"]
            for name in UPDATABLE_FIELDS:
                if name in data:
                    setattr(profile, name, data[name])

        return profile
