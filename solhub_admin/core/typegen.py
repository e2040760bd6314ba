# solhub_admin/core/typegen.py
from typing import Iterable, Optional
from datetime import datetime

from .features import active_keys
from .utils import utcnow

BRANDING_INTERFACE = """export interface LaboratoryBranding {
  logo?: string | null
  icon?: string
  favicon?: string | null
  primaryColor: string
  secondaryColor: string
}"""

CONFIG_INTERFACE = """export interface LaboratoryConfig {
  branches: string[]
  paymentMethods: string[]
  defaultExchangeRate: number
  timezone: string
  phoneNumber?: string
  webhooks?: {
    generateDoc?: string
    generatePdf?: string
    sendEmail?: string
  }
}"""

LABORATORY_INTERFACE = """export interface Laboratory {
  id: string
  slug: string
  name: string
  status: 'active' | 'inactive' | 'trial'
  features: LaboratoryFeatures
  branding: LaboratoryBranding
  config: LaboratoryConfig
  created_at: string
  updated_at: string
}"""


def generate_typescript(catalog: Iterable[dict], generated_at: Optional[datetime] = None) -> str:
    """Render client typings for laboratories from the active feature catalog"""
    keys = active_keys(catalog)
    if not keys:
        raise ValueError("No features found in the catalog")

    feature_lines = "\n".join(f"  {key}: boolean" for key in keys)
    stamp = (generated_at or utcnow()).isoformat()

    return "\n\n".join(
        [
            "// Generated by the Solhub admin dashboard\n"
            f"// Last update: {stamp}\n"
            "// Do not edit by hand; add features through the dashboard",
            "export interface LaboratoryFeatures {\n" + feature_lines + "\n}",
            BRANDING_INTERFACE,
            CONFIG_INTERFACE,
            LABORATORY_INTERFACE,
        ]
    )
