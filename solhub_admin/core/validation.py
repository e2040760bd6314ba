# solhub_admin/core/validation.py
from flask import request
from marshmallow import Schema, EXCLUDE, ValidationError, fields, post_load, pre_load

from solhub_admin.core.exceptions import ValidationFailed
from solhub_admin.core.security.sanitization import sanitizer
from solhub_admin.core.utils import format_datetime, parse_datetime


class SanitizedSchema(Schema):
    """Base schema: unknown keys are dropped and every string is sanitized"""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def sanitize_input(self, data, **kwargs):
        return sanitizer.sanitize(data)


class StorageKeysSchema(SanitizedSchema):
    """
    Loads into the camelCase keys the JSON columns are stored with.

    Fields declare their wire name through ``data_key``; unknown keys are
    handled per the subclass's ``Meta.unknown``.
    """

    @post_load
    def to_storage_keys(self, data, **kwargs):
        keys = {name: field.data_key or name for name, field in self.fields.items()}
        return {keys.get(key, key): value for key, value in data.items()}


class FlexibleDateTime(fields.Field):
    """ISO timestamp or plain date, stored as naive UTC"""

    def _serialize(self, value, attr, obj, **kwargs):
        return format_datetime(value)

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return parse_datetime(value)
        except (TypeError, ValueError) as e:
            raise ValidationError("Not a valid date or datetime.") from e


def first_error(messages):
    """Flatten marshmallow's nested error dict into one readable message"""
    if isinstance(messages, dict):
        for key, value in messages.items():
            inner = first_error(value)
            if isinstance(key, int) or key == "_schema":
                return inner
            return f"{key}: {inner}"
    if isinstance(messages, list) and messages:
        return first_error(messages[0])
    return str(messages)


def load_json(schema: Schema, partial=False, data=None):
    """Validate the request body against ``schema`` or raise a 400"""
    if data is None:
        data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed("Request body must be a JSON object")

    try:
        return schema.load(data, partial=partial)
    except ValidationError as err:
        raise ValidationFailed(first_error(err.messages), payload={"details": err.messages})
