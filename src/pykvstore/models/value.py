"""The tagged ``Value`` union.

A value is exactly one of five variants, each a frozen pydantic model with a
literal ``kind`` discriminator::

    StringValue   kind="string"   str
    BoolValue     kind="bool"     bool
    FloatValue    kind="float"    float
    IntValue      kind="int"      int
    JsonValue     kind="json"     already-parsed JSON document

Equality is structural and variant-aware: ``IntValue(value=1)`` never equals
``FloatValue(value=1.0)``.

Extraction is type-safe. ``as_string``/``as_bool``/``as_float``/``as_int``/
``as_json`` return the payload only for their own variant and ``None``
otherwise; nothing is converted.  :func:`to_display_string` is the single
lossy escape hatch.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Annotated, Any, Literal

from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter, ValidationError, field_validator
from pydantic import JsonValue as JsonDocument

from pykvstore.config import DEFAULT_DISPLAY_CONFIG, DisplayConfig
from pykvstore.exceptions import InvalidValueError
from pykvstore.models._base import KvBaseModel

_logger = logging.getLogger(__name__)


class TypedValue(KvBaseModel):
    """Common base of the five value variants."""

    def display(self, config: DisplayConfig = DEFAULT_DISPLAY_CONFIG) -> str:
        raise NotImplementedError


class StringValue(TypedValue):
    kind: Literal["string"] = "string"
    value: StrictStr

    def display(self, config: DisplayConfig = DEFAULT_DISPLAY_CONFIG) -> str:
        return self.value


class BoolValue(TypedValue):
    kind: Literal["bool"] = "bool"
    value: StrictBool

    def display(self, config: DisplayConfig = DEFAULT_DISPLAY_CONFIG) -> str:
        # Python literal spelling: "True" / "False".
        return str(self.value)


class FloatValue(TypedValue):
    kind: Literal["float"] = "float"
    value: StrictFloat

    @field_validator("value", mode="before")
    @classmethod
    def _widen_int(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("bool is not a float")
        if isinstance(value, int):
            try:
                return float(value)
            except OverflowError as exc:
                raise ValueError("int too large for a float") from exc
        return value

    def display(self, config: DisplayConfig = DEFAULT_DISPLAY_CONFIG) -> str:
        return repr(self.value)


class IntValue(TypedValue):
    kind: Literal["int"] = "int"
    value: StrictInt

    def display(self, config: DisplayConfig = DEFAULT_DISPLAY_CONFIG) -> str:
        return str(self.value)


def _document_key(doc: Any) -> Any:
    """Hashable, type-tagged form of a JSON document.

    JSON ``true`` and ``1`` (and ``1`` and ``1.0``) are different documents
    even though Python compares them equal.
    """
    if isinstance(doc, dict):
        return ("object", frozenset((key, _document_key(item)) for key, item in doc.items()))
    if isinstance(doc, list):
        return ("array", tuple(_document_key(item) for item in doc))
    return (type(doc).__name__, doc)


class JsonValue(TypedValue):
    """An already-parsed JSON document.

    The document is opaque to the store: it is compared structurally, with
    JSON types kept apart (``true`` is not ``1``). It is deep-copied on the
    way in and by :func:`as_json` on the way out, so neither the caller's
    document nor a returned one is shared with the stored value.
    ``None`` (JSON ``null``) is a valid document.
    """

    kind: Literal["json"] = "json"
    value: JsonDocument

    @field_validator("value")
    @classmethod
    def _detach(cls, value: Any) -> Any:
        return copy.deepcopy(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedValue):
            return NotImplemented
        return isinstance(other, JsonValue) and _document_key(self.value) == _document_key(other.value)

    def __hash__(self) -> int:
        return hash((self.kind, _document_key(self.value)))

    def display(self, config: DisplayConfig = DEFAULT_DISPLAY_CONFIG) -> str:
        return json.dumps(
            self.value,
            sort_keys=config.json_sort_keys,
            separators=config.json_separators,
            ensure_ascii=config.json_ensure_ascii,
        )


Value = Annotated[
    StringValue | BoolValue | FloatValue | IntValue | JsonValue,
    Field(discriminator="kind"),
]
"""Discriminated union of the five variants."""

_VARIANTS: tuple[type[TypedValue], ...] = (StringValue, BoolValue, FloatValue, IntValue, JsonValue)
_VALUE_ADAPTER: TypeAdapter[Any] = TypeAdapter(Value)


def is_value(obj: object) -> bool:
    """Return ``True`` when *obj* is one of the five value variants."""
    return isinstance(obj, _VARIANTS)


def _build(model: type[TypedValue], payload: Any) -> Any:
    try:
        return model(value=payload)
    except ValidationError as exc:
        kind = model.model_fields["kind"].default
        raise InvalidValueError(
            f"{type(payload).__name__} payload is not a valid {kind} value",
            kind=kind,
        ) from exc


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def string_value(s: str) -> StringValue:
    return _build(StringValue, s)


def bool_value(b: bool) -> BoolValue:
    return _build(BoolValue, b)


def float_value(f: float) -> FloatValue:
    """Build a float value. Ints are accepted and stored as floats; bools are not."""
    return _build(FloatValue, f)


def int_value(i: int) -> IntValue:
    return _build(IntValue, i)


def json_value(doc: JsonDocument) -> JsonValue:
    return _build(JsonValue, doc)


def empty_value() -> StringValue:
    """Return the canonical "no value": an empty :class:`StringValue`."""
    return StringValue(value="")


# ---------------------------------------------------------------------------
# Type-safe extraction
# ---------------------------------------------------------------------------


def as_string(value: Value) -> str | None:
    return value.value if isinstance(value, StringValue) else None


def as_bool(value: Value) -> bool | None:
    return value.value if isinstance(value, BoolValue) else None


def as_float(value: Value) -> float | None:
    """Return the payload of a :class:`FloatValue`; an :class:`IntValue` yields ``None``."""
    return value.value if isinstance(value, FloatValue) else None


def as_int(value: Value) -> int | None:
    return value.value if isinstance(value, IntValue) else None


def as_json(value: Value) -> JsonDocument | None:
    """Return the document of a :class:`JsonValue`.

    A stored JSON ``null`` also comes back as ``None``; inspect the value
    itself when that distinction matters.
    """
    return copy.deepcopy(value.value) if isinstance(value, JsonValue) else None


def to_display_string(value: Value, config: DisplayConfig | None = None) -> str:
    """Render any value as text. Lossy, never fails.

    * strings are returned unchanged
    * booleans render as ``"True"`` / ``"False"``
    * ints as decimal text, floats via ``repr`` (``"1.5"``, ``"inf"``)
    * JSON documents via :func:`json.dumps`, shaped by *config*

    Anything that is not a value variant renders as ``""``.
    """
    if not isinstance(value, TypedValue):
        return ""
    return value.display(config or DEFAULT_DISPLAY_CONFIG)


# ---------------------------------------------------------------------------
# Tagged form
# ---------------------------------------------------------------------------


def value_to_tagged(value: Value) -> dict[str, Any]:
    """Return ``{"kind": ..., "value": ...}`` for *value*."""
    return copy.deepcopy(value.model_dump())


def value_from_tagged(data: Any) -> Value:
    """Validate a ``{"kind": ..., "value": ...}`` mapping into a value.

    Raises
    ------
    InvalidValueError
        Unknown ``kind``, missing keys, or a payload of the wrong type.
    """
    try:
        return _VALUE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        kind = data.get("kind", "") if isinstance(data, dict) else ""
        _logger.debug("Rejected tagged value kind=%r errors=%d", kind, exc.error_count())
        raise InvalidValueError(f"Invalid tagged value: {exc.error_count()} error(s)", kind=str(kind)) from exc
