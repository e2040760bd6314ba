# solhub_admin/services/code_service.py
import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy import select

from solhub_admin.core.access_codes import code_status, generate_code, normalize_code
from solhub_admin.core.exceptions import BackendError, CodeNotFoundError, LaboratoryNotFoundError, ValidationFailed
from solhub_admin.core.utils import to_naive_utc
from solhub_admin.models import Laboratory, LaboratoryCode
from .base import BaseService

logger = logging.getLogger(__name__)

GENERATE_ATTEMPTS = 5


class CodeService(BaseService):
    """Registration codes users enter to join a laboratory"""

    def _code_taken(self, code: str, exclude_id=None) -> bool:
        query = select(LaboratoryCode.id).where(LaboratoryCode.code == code)
        if exclude_id:
            query = query.where(LaboratoryCode.id != exclude_id)
        return self.session.execute(query).first() is not None

    def _laboratory(self, lab_id) -> Laboratory:
        lab = self.session.get(Laboratory, lab_id)
        if lab is None:
            raise LaboratoryNotFoundError()
        return lab

    def list_codes(self, laboratory_id=None, status: Optional[str] = None) -> List[LaboratoryCode]:
        query = select(LaboratoryCode).order_by(LaboratoryCode.created_at.desc())
        if laboratory_id:
            query = query.where(LaboratoryCode.laboratory_id == laboratory_id)
        codes = list(self.session.execute(query).scalars())
        if status:
            # Derived from the row, not stored
            codes = [code for code in codes if code_status(code).value == status]
        return codes

    def get_code(self, code_id) -> LaboratoryCode:
        code = self.session.get(LaboratoryCode, code_id)
        if code is None:
            raise CodeNotFoundError()
        return code

    def create_code(self, data: Mapping[str, Any], created_by: Optional[str] = None) -> LaboratoryCode:
        self._laboratory(data["laboratory_id"])

        code_value = normalize_code(data["code"])
        if not code_value:
            raise ValidationFailed("Code cannot be empty")
        if self._code_taken(code_value):
            raise ValidationFailed(f"Code already exists: {code_value}")

        code = LaboratoryCode(
            laboratory_id=data["laboratory_id"],
            code=code_value,
            is_active=data.get("is_active", True),
            max_uses=data.get("max_uses"),
            current_uses=0,
            expires_at=to_naive_utc(data.get("expires_at")),
            created_by=created_by,
        )
        with self.unit_of_work(f"Code already exists: {code_value}"):
            self.session.add(code)

        logger.info(f"Created access code {code_value}", extra={"laboratory_id": code.laboratory_id})
        return code

    def update_code(self, code_id, data: Mapping[str, Any]) -> LaboratoryCode:
        with self.unit_of_work():
            code = self.get_code(code_id)

            if "code" in data:
                code_value = normalize_code(data["code"])
                if not code_value:
                    raise ValidationFailed("Code cannot be empty")
                if self._code_taken(code_value, exclude_id=code.id):
                    raise ValidationFailed(f"Code already exists: {code_value}")
                code.code = code_value
            if "is_active" in data:
                code.is_active = data["is_active"]
            if "max_uses" in data:
                code.max_uses = data["max_uses"]
            if "expires_at" in data:
                code.expires_at = to_naive_utc(data["expires_at"])

        return code

    def suggest_code(self, lab_id) -> str:
        """A fresh ``SLUG-XXXXXX`` code not yet in use"""
        lab = self._laboratory(lab_id)
        for _ in range(GENERATE_ATTEMPTS):
            candidate = normalize_code(generate_code(lab.slug))
            if not self._code_taken(candidate):
                return candidate
        raise BackendError("Could not generate a unique code")
