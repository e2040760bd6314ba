# solhub_admin/api/users/schemas.py
from marshmallow import fields, validate

from solhub_admin.core.validation import SanitizedSchema


class ProfileUpdateSchema(SanitizedSchema):
    display_name = fields.Str(allow_none=True, validate=validate.Length(max=255))
    role = fields.Str(validate=validate.Length(min=1, max=50))
    estado = fields.Str(validate=validate.Length(min=1, max=50))
    assigned_branch = fields.Str(allow_none=True, validate=validate.Length(max=100))
    laboratory_id = fields.Str()
