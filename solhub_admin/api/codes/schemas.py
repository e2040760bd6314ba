# solhub_admin/api/codes/schemas.py
from marshmallow import fields, validate

from solhub_admin.core.validation import FlexibleDateTime, SanitizedSchema


class AccessCodeSchema(SanitizedSchema):
    laboratory_id = fields.Str(required=True)
    code = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    max_uses = fields.Int(allow_none=True, validate=validate.Range(min=1))
    expires_at = FlexibleDateTime(allow_none=True)
    is_active = fields.Bool(load_default=True)


class AccessCodeUpdateSchema(SanitizedSchema):
    code = fields.Str(validate=validate.Length(min=1, max=100))
    max_uses = fields.Int(allow_none=True, validate=validate.Range(min=1))
    expires_at = FlexibleDateTime(allow_none=True)
    is_active = fields.Bool()


class GenerateCodeSchema(SanitizedSchema):
    laboratory_id = fields.Str(required=True)
