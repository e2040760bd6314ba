# solhub_admin/core/constants.py
from enum import Enum


class LaboratoryStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TRIAL = "trial"


class FeatureCategory(Enum):
    CORE = "core"
    PREMIUM = "premium"
    ADDON = "addon"


class RequiredPlan(Enum):
    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class AdminRole(Enum):
    SUPERADMIN = "superadmin"
    SUPPORT = "support"
    ANALYST = "analyst"


class CodeStatus(Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    EXHAUSTED = "exhausted"
    INACTIVE = "inactive"


class ChangeKind(Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


# Filter value meaning "no filter" in list endpoints
ALL = "all"

SLUG_PATTERN = r"^[a-z0-9-]+$"

DEFAULT_BRANDING = {
    "logo": None,
    "icon": "solhub",
    "favicon": None,
    "primaryColor": "#0066cc",
    "secondaryColor": "#00cc66",
}

DEFAULT_CONFIG = {
    "branches": ["Principal"],
    "paymentMethods": ["Efectivo", "Zelle"],
    "defaultExchangeRate": 36.5,
    "timezone": "America/Caracas",
    "modules": {},
}
