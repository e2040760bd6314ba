# solhub_admin/api/features/schemas.py
from marshmallow import fields, validate

from solhub_admin.core.constants import FeatureCategory, RequiredPlan
from solhub_admin.core.validation import SanitizedSchema

FEATURE_KEY_PATTERN = r"^[A-Za-z][A-Za-z0-9_]*$"


class FeatureSchema(SanitizedSchema):
    key = fields.Str(
        required=True,
        validate=validate.Regexp(
            FEATURE_KEY_PATTERN, error="Key must start with a letter and contain only letters, digits or _"
        ),
    )
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    description = fields.Str(allow_none=True)
    category = fields.Str(validate=validate.OneOf([c.value for c in FeatureCategory]))
    required_plan = fields.Str(validate=validate.OneOf([p.value for p in RequiredPlan]))
    icon = fields.Str(allow_none=True)
    component_path = fields.Str(allow_none=True)
    is_active = fields.Bool()
