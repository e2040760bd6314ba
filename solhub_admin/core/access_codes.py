# solhub_admin/core/access_codes.py
import secrets
import string
from typing import Any, Mapping, Optional, Union
from datetime import datetime

from .constants import CodeStatus
from .utils import parse_datetime, utcnow

CODE_ALPHABET = string.ascii_uppercase + string.digits
RANDOM_PART_LENGTH = 6


def normalize_code(code: str) -> str:
    return code.strip().upper()


def generate_code(slug: str) -> str:
    """Suggest a registration code for a laboratory, e.g. ``LABVARGAS-7QK2ZD``"""
    random_part = "".join(secrets.choice(CODE_ALPHABET) for _ in range(RANDOM_PART_LENGTH))
    return f"{slug.upper()}-{random_part}"


def _get(code: Union[Mapping[str, Any], Any], name: str, default=None):
    if isinstance(code, Mapping):
        return code.get(name, default)
    return getattr(code, name, default)


def is_expired(expires_at, now: Optional[datetime] = None) -> bool:
    if expires_at is None:
        return False
    return parse_datetime(expires_at) < (now or utcnow())


def is_exhausted(max_uses: Optional[int], current_uses: Optional[int]) -> bool:
    if max_uses is None:
        return False
    return (current_uses or 0) >= max_uses


def code_status(code, now: Optional[datetime] = None) -> CodeStatus:
    """
    Derive the effective status of an access code.

    Accepts a model instance or its dict form. Precedence is
    inactive > expired > exhausted > active.
    """
    if not _get(code, "is_active", True):
        return CodeStatus.INACTIVE
    if is_expired(_get(code, "expires_at"), now):
        return CodeStatus.EXPIRED
    if is_exhausted(_get(code, "max_uses"), _get(code, "current_uses", 0)):
        return CodeStatus.EXHAUSTED
    return CodeStatus.ACTIVE
