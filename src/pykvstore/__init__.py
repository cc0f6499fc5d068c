"""pykvstore - Immutable, key-ordered typed key-value storage."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pykvstore")
except PackageNotFoundError:
    __version__ = "0+local"
from pykvstore.config import DEFAULT_DISPLAY_CONFIG, DisplayConfig
from pykvstore.exceptions import (
    InvalidKeyError,
    InvalidValueError,
    KvStoreError,
)
from pykvstore.models import (
    BoolValue,
    FloatValue,
    IntValue,
    JsonDocument,
    JsonValue,
    StringValue,
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
    json_value,
    string_value,
    to_display_string,
)
from pykvstore.storage import MergeSide, Storage, merge, union_all

__all__ = [
    "__version__",
    "BoolValue",
    "DEFAULT_DISPLAY_CONFIG",
    "DisplayConfig",
    "FloatValue",
    "IntValue",
    "InvalidKeyError",
    "InvalidValueError",
    "JsonDocument",
    "JsonValue",
    "KvStoreError",
    "MergeSide",
    "Storage",
    "StringValue",
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
    "json_value",
    "merge",
    "string_value",
    "to_display_string",
    "union_all",
]
