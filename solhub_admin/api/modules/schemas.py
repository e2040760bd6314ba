# solhub_admin/api/modules/schemas.py
from marshmallow import INCLUDE, fields, validate

from solhub_admin.core.validation import SanitizedSchema, StorageKeysSchema

MODULE_NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9_-]*$"


class FieldDefinitionSchema(StorageKeysSchema):
    class Meta:
        unknown = INCLUDE

    label = fields.Str()
    default_enabled = fields.Bool(data_key="defaultEnabled", load_default=False)
    default_required = fields.Bool(data_key="defaultRequired", load_default=False)


class ActionDefinitionSchema(StorageKeysSchema):
    class Meta:
        unknown = INCLUDE

    label = fields.Str()
    default_enabled = fields.Bool(data_key="defaultEnabled", load_default=False)


class ModuleStructureSchema(SanitizedSchema):
    fields_ = fields.Dict(
        keys=fields.Str(),
        values=fields.Nested(FieldDefinitionSchema),
        data_key="fields",
        attribute="fields",
        load_default=dict,
    )
    actions = fields.Dict(keys=fields.Str(), values=fields.Nested(ActionDefinitionSchema), load_default=dict)
    settings = fields.Dict(keys=fields.Str(), load_default=dict)


class ModuleSchema(SanitizedSchema):
    feature_key = fields.Str(required=True)
    module_name = fields.Str(
        required=True,
        validate=validate.Regexp(
            MODULE_NAME_PATTERN, error="Module name must start with a letter and contain only letters, digits, _ or -"
        ),
    )
    structure = fields.Nested(ModuleStructureSchema, load_default=dict)
    is_active = fields.Bool()
