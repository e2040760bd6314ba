# solhub_admin/api/laboratories/schemas.py
from marshmallow import INCLUDE, ValidationError, fields, validate, validates_schema

from solhub_admin.core.constants import SLUG_PATTERN, LaboratoryStatus
from solhub_admin.core.validation import SanitizedSchema, StorageKeysSchema

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class BrandingSchema(StorageKeysSchema):
    logo = fields.Str(allow_none=True)
    icon = fields.Str(allow_none=True)
    favicon = fields.Str(allow_none=True)
    primary_color = fields.Str(data_key="primaryColor", validate=validate.Regexp(HEX_COLOR))
    secondary_color = fields.Str(data_key="secondaryColor", validate=validate.Regexp(HEX_COLOR))


class WebhooksSchema(StorageKeysSchema):
    generate_doc = fields.Str(data_key="generateDoc", allow_none=True)
    generate_pdf = fields.Str(data_key="generatePdf", allow_none=True)
    send_email = fields.Str(data_key="sendEmail", allow_none=True)


class LaboratoryConfigSchema(StorageKeysSchema):
    """Known keys are type-checked; extras (examTypes, codeTemplate, ...) pass through"""

    class Meta:
        unknown = INCLUDE

    branches = fields.List(fields.Str())
    payment_methods = fields.List(fields.Str(), data_key="paymentMethods")
    default_exchange_rate = fields.Float(data_key="defaultExchangeRate", validate=validate.Range(min=0))
    timezone = fields.Str()
    phone_number = fields.Str(data_key="phoneNumber", allow_none=True)
    webhooks = fields.Nested(WebhooksSchema)
    modules = fields.Dict(keys=fields.Str(), values=fields.Dict())


class LaboratorySchema(SanitizedSchema):
    slug = fields.Str(
        required=True,
        validate=validate.Regexp(
            SLUG_PATTERN, error="Slug may only contain lowercase letters, numbers and hyphens"
        ),
    )
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    status = fields.Str(validate=validate.OneOf([s.value for s in LaboratoryStatus]))
    branding = fields.Nested(BrandingSchema)
    config = fields.Nested(LaboratoryConfigSchema)


class FeatureToggleSchema(SanitizedSchema):
    """Either ``{"key": ..., "enabled": ...}`` or a whole ``{"features": {...}}`` map"""

    key = fields.Str()
    enabled = fields.Bool()
    features = fields.Dict(keys=fields.Str(), values=fields.Bool())

    @validates_schema
    def validate_shape(self, data, **kwargs):
        if "features" in data:
            return
        if "key" not in data or "enabled" not in data:
            raise ValidationError("Provide key and enabled, or a features object")


class ModuleConfigSchema(SanitizedSchema):
    fields_ = fields.Dict(keys=fields.Str(), data_key="fields", attribute="fields")
    actions = fields.Dict(keys=fields.Str())
    settings = fields.Dict(keys=fields.Str())


class CodeTemplatePreviewSchema(SanitizedSchema):
    template = fields.Str(required=True)
    code_mappings = fields.Dict(keys=fields.Str(), values=fields.Str(), data_key="codeMappings", load_default=dict)
    exam_type = fields.Str(allow_none=True, data_key="examType")
    exam_code = fields.Str(allow_none=True, data_key="examCode")
    case_type = fields.Int(data_key="caseType", load_default=1, validate=validate.Range(min=0))
    counter = fields.Int(load_default=1, validate=validate.Range(min=0))
