from marshmallow import EXCLUDE, Schema, fields, validate

from solhub_admin.core.validation import SanitizedSchema


class LoginSchema(Schema):
    """Credentials are checked exactly as typed, so they skip sanitization."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=validate.Length(min=1))


class VerifyCodeSchema(SanitizedSchema):
    code = fields.Str(required=True)
