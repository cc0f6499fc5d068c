"""Typed value models for pykvstore."""

from pykvstore.models._base import KvBaseModel
from pykvstore.models.value import (
    BoolValue,
    FloatValue,
    IntValue,
    JsonDocument,
    JsonValue,
    StringValue,
    TypedValue,
    Value,
    as_bool,
    as_float,
    as_int,
    as_json,
    as_string,
    bool_value,
    empty_value,
    float_value,
    int_value,
    is_value,
    json_value,
    string_value,
    to_display_string,
    value_from_tagged,
    value_to_tagged,
)

__all__ = [
    "BoolValue",
    "FloatValue",
    "IntValue",
    "JsonDocument",
    "JsonValue",
    "KvBaseModel",
    "StringValue",
    "TypedValue",
    "Value",
    "as_bool",
    "as_float",
    "as_int",
    "as_json",
    "as_string",
    "bool_value",
    "empty_value",
    "float_value",
    "int_value",
    "is_value",
    "json_value",
    "string_value",
    "to_display_string",
    "value_from_tagged",
    "value_to_tagged",
]
