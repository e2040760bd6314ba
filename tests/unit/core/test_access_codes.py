# tests/unit/core/test_access_codes.py
from datetime import datetime

import pytest

from solhub_admin.core.access_codes import code_status, generate_code, normalize_code
from solhub_admin.core.constants import CodeStatus

NOW = datetime(2025, 6, 1, 12, 0, 0)


@pytest.mark.parametrize(
    "code, expected",
    [
        ({"is_active": True, "max_uses": None, "current_uses": 40}, CodeStatus.ACTIVE),
        ({"is_active": True, "max_uses": 10, "current_uses": 10}, CodeStatus.EXHAUSTED),
        ({"is_active": True, "expires_at": "2025-01-01T00:00:00", "max_uses": 10, "current_uses": 10},
         CodeStatus.EXPIRED),
        ({"is_active": False, "expires_at": "2000-01-01", "max_uses": 1, "current_uses": 1}, CodeStatus.INACTIVE),
        ({"is_active": True, "expires_at": "2030-01-01T00:00:00Z", "max_uses": 5, "current_uses": 1},
         CodeStatus.ACTIVE),
    ],
)
def test_code_status_precedence(code, expected):
    assert code_status(code, now=NOW) is expected


def test_used_up_code_is_exhausted():
    code = {"code": "LAB-ABC123", "max_uses": 5, "current_uses": 5, "expires_at": None, "is_active": True}

    assert code_status(code, now=NOW) is CodeStatus.EXHAUSTED


def test_code_status_accepts_model_like_objects():
    class Code:
        is_active = True
        expires_at = None
        max_uses = 3
        current_uses = 3

    assert code_status(Code(), now=NOW) is CodeStatus.EXHAUSTED


def test_generated_code_is_slug_prefixed():
    code = generate_code("conspat")
    prefix, random_part = code.split("-")

    assert prefix == "CONSPAT"
    assert len(random_part) == 6
    assert random_part.isalnum() and random_part == random_part.upper()


def test_normalize_code():
    assert normalize_code("  conspat-abc123 ") == "CONSPAT-ABC123"
