"""Tests for the tagged ``{"kind": ..., "value": ...}`` form."""

from __future__ import annotations

import logging

import pytest

from pykvstore.exceptions import InvalidKeyError, InvalidValueError
from pykvstore.models.value import (
    FloatValue,
    bool_value,
    float_value,
    int_value,
    json_value,
    string_value,
    value_from_tagged,
    value_to_tagged,
)
from pykvstore.storage.store import Storage


def test_value_to_tagged() -> None:
    assert value_to_tagged(string_value("x")) == {"kind": "string", "value": "x"}
    assert value_to_tagged(json_value({"a": [1]})) == {"kind": "json", "value": {"a": [1]}}


def test_value_from_tagged_dispatches_on_kind() -> None:
    assert value_from_tagged({"kind": "bool", "value": False}) == bool_value(False)
    assert value_from_tagged({"kind": "int", "value": 7}) == int_value(7)
    assert value_from_tagged({"kind": "json", "value": [1, {"b": None}]}) == json_value([1, {"b": None}])


def test_value_from_tagged_widens_int_to_float() -> None:
    value = value_from_tagged({"kind": "float", "value": 2})
    assert isinstance(value, FloatValue)
    assert value == float_value(2.0)


@pytest.mark.parametrize(
    "data",
    [
        {"kind": "decimal", "value": "1.0"},
        {"kind": "int", "value": "1"},
        {"kind": "int", "value": True},
        {"kind": "string"},
        {"value": "x"},
        {"kind": "string", "value": "x", "extra": 1},
        "string",
    ],
)
def test_value_from_tagged_rejects_malformed(data) -> None:
    with pytest.raises(InvalidValueError):
        value_from_tagged(data)


def test_storage_tagged_is_key_ordered() -> None:
    storage = Storage.from_list([("b", int_value(1)), ("a", string_value("x"))])
    tagged = storage.to_tagged()
    assert list(tagged) == ["a", "b"]
    assert tagged["b"] == {"kind": "int", "value": 1}


def test_storage_from_tagged_inverse() -> None:
    storage = Storage.from_list(
        [
            ("a", string_value("x")),
            ("b", float_value(0.5)),
            ("c", json_value({"k": [True]})),
        ]
    )
    assert Storage.from_tagged(storage.to_tagged()) == storage


def test_storage_from_tagged_names_offending_key() -> None:
    with pytest.raises(InvalidValueError, match="'db.port'"):
        Storage.from_tagged({"db.port": {"kind": "int", "value": "5432"}})


def test_storage_from_tagged_rejects_non_str_key() -> None:
    with pytest.raises(InvalidKeyError):
        Storage.from_tagged({1: {"kind": "int", "value": 1}})  # type: ignore[dict-item]


def test_rejected_entry_logged_redacted(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="pykvstore.storage.store")
    with pytest.raises(InvalidValueError):
        Storage.from_tagged({"db.password": {"kind": "int", "value": "hunter2"}})
    assert "hunter2" not in caplog.text
    assert "<redacted>" in caplog.text
