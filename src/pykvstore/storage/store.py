"""Immutable, key-ordered typed storage.

A :class:`Storage` maps ``str`` keys to values. Every operation that would
change it returns a new instance instead; the receiver is never modified and
can be shared freely.

Keys are always listed and traversed in ascending order, which keeps
serialisation and combination results deterministic.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, NoReturn

from pykvstore._redact import redact_for_log
from pykvstore.config import DisplayConfig
from pykvstore.exceptions import InvalidKeyError, InvalidValueError
from pykvstore.models.value import (
    JsonDocument,
    Value,
    as_bool,
    as_float,
    as_int,
    as_json,
    as_string,
    is_value,
    to_display_string,
    value_from_tagged,
    value_to_tagged,
)
from pykvstore.storage.merge import A, OnBoth, OnLeft, OnRight, merge

_logger = logging.getLogger(__name__)

_Pairs = list[tuple[str, Value]]


def _check_key(key: Any) -> str:
    if not isinstance(key, str):
        raise InvalidKeyError(f"Storage keys must be str, got {type(key).__name__}", key=key)
    return key


def _check_value(value: Any) -> Value:
    if not is_value(value):
        raise InvalidValueError(f"Storage values must be Value variants, got {type(value).__name__}")
    return value


# Accumulator callbacks for the derived combinators. Each appends to a pair
# list; merge visits keys in ascending order so the list stays sorted.


def _keep_left(key: str, value: Value, acc: _Pairs) -> _Pairs:
    acc.append((key, value))
    return acc


def _keep_left_of_both(key: str, left: Value, right: Value, acc: _Pairs) -> _Pairs:
    acc.append((key, left))
    return acc


def _skip(key: str, value: Value, acc: _Pairs) -> _Pairs:
    return acc


def _skip_both(key: str, left: Value, right: Value, acc: _Pairs) -> _Pairs:
    return acc


class Storage:
    """Ordered mapping from ``str`` keys to typed values.

    Lookups never raise: a missing key, or a value of another variant than
    the accessor asks for, yields ``None``.
    """

    __slots__ = ("_data", "_keys")

    _data: Mapping[str, Value]
    _keys: tuple[str, ...]

    def __init__(self, pairs: Iterable[tuple[str, Value]] = ()) -> None:
        data: dict[str, Value] = {}
        seen = 0
        for key, value in pairs:
            data[_check_key(key)] = _check_value(value)
            seen += 1
        if seen > len(data):
            _logger.debug("Collapsed %d duplicate key(s) while building storage", seen - len(data))
        keys = tuple(sorted(data))
        object.__setattr__(self, "_data", MappingProxyType({key: data[key] for key in keys}))
        object.__setattr__(self, "_keys", keys)

    @classmethod
    def _from_sorted(cls, pairs: _Pairs) -> Storage:
        """Wrap pairs already known to be valid and strictly ascending."""
        storage = cls.__new__(cls)
        object.__setattr__(storage, "_data", MappingProxyType(dict(pairs)))
        object.__setattr__(storage, "_keys", tuple(key for key, _ in pairs))
        return storage

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise AttributeError("Storage is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError("Storage is immutable")

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Storage:
        return cls()

    @classmethod
    def singleton(cls, key: str, value: Value) -> Storage:
        return cls([(key, value)])

    @classmethod
    def from_list(cls, pairs: Iterable[tuple[str, Value]]) -> Storage:
        """Build from ``(key, value)`` pairs; a later duplicate key overwrites an earlier one."""
        return cls(pairs)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Value]) -> Storage:
        return cls(mapping.items())

    # -----------------------------------------------------------------------
    # Mutation (all return a new Storage)
    # -----------------------------------------------------------------------

    def update(self, key: str, fn: Callable[[Value | None], Value | None]) -> Storage:
        """Return a storage where *key* holds ``fn(current)``.

        *fn* receives the current value, or ``None`` when the key is absent.
        Returning ``None`` removes the key; returning a value sets it.
        """
        _check_key(key)
        current = self._data.get(key)
        new = fn(current)

        if new is None:
            if current is None:
                return self
            data = dict(self._data)
            del data[key]
            index = bisect.bisect_left(self._keys, key)
            return self._wrap(data, self._keys[:index] + self._keys[index + 1 :])

        _check_value(new)
        data = dict(self._data)
        data[key] = new
        if current is not None:
            return self._wrap(data, self._keys)
        index = bisect.bisect_left(self._keys, key)
        return self._wrap(data, self._keys[:index] + (key,) + self._keys[index:])

    def insert(self, key: str, value: Value) -> Storage:
        """Return a storage with *key* set to *value*, replacing any previous value."""
        _check_value(value)
        return self.update(key, lambda _current: value)

    def remove(self, key: str) -> Storage:
        """Return a storage without *key*. Removing an absent key is a no-op."""
        return self.update(key, lambda _current: None)

    @classmethod
    def _wrap(cls, data: dict[str, Value], keys: tuple[str, ...]) -> Storage:
        return cls._from_sorted([(key, data[key]) for key in keys])

    # -----------------------------------------------------------------------
    # Query
    # -----------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self._keys

    def member(self, key: str) -> bool:
        return isinstance(key, str) and key in self._data

    def size(self) -> int:
        return len(self._keys)

    def get(self, key: str) -> Value | None:
        if not isinstance(key, str):
            return None
        return self._data.get(key)

    def get_string(self, key: str) -> str | None:
        value = self.get(key)
        return None if value is None else as_string(value)

    def get_bool(self, key: str) -> bool | None:
        value = self.get(key)
        return None if value is None else as_bool(value)

    def get_float(self, key: str) -> float | None:
        """Return a float payload. An int stored under *key* yields ``None``."""
        value = self.get(key)
        return None if value is None else as_float(value)

    def get_int(self, key: str) -> int | None:
        value = self.get(key)
        return None if value is None else as_int(value)

    def get_json(self, key: str) -> JsonDocument | None:
        value = self.get(key)
        return None if value is None else as_json(value)

    def get_string_unsafe(self, key: str, config: DisplayConfig | None = None) -> str:
        """Return the display text of whatever is stored under *key*.

        This is the only lossy accessor: any variant is rendered with
        :func:`~pykvstore.models.value.to_display_string`, so ``1.5`` comes
        back as ``"1.5"`` and ``True`` as ``"True"``. An absent key yields
        ``""``, indistinguishable from a stored empty string.
        """
        value = self.get(key)
        if value is None:
            return ""
        return to_display_string(value, config)

    # -----------------------------------------------------------------------
    # Listing
    # -----------------------------------------------------------------------

    def keys(self) -> list[str]:
        return list(self._keys)

    def values(self) -> list[Value]:
        return [self._data[key] for key in self._keys]

    def to_list(self) -> list[tuple[str, Value]]:
        return [(key, self._data[key]) for key in self._keys]

    # -----------------------------------------------------------------------
    # Combination
    # -----------------------------------------------------------------------

    def merge(
        self,
        on_left: OnLeft[A],
        on_both: OnBoth[A],
        on_right: OnRight[A],
        other: Storage,
        initial: A,
    ) -> A:
        """Ordered three-way fold with *other*. See :func:`pykvstore.storage.merge.merge`."""
        return merge(on_left, on_both, on_right, self, other, initial)

    def union(self, other: Storage) -> Storage:
        """Every key of either side; on collision the value from ``self`` wins."""
        return self._from_sorted(merge(_keep_left, _keep_left_of_both, _keep_left, self, other, []))

    def intersect(self, other: Storage) -> Storage:
        """Keys present on both sides, with values from ``self``."""
        return self._from_sorted(merge(_skip, _keep_left_of_both, _skip, self, other, []))

    def diff(self, other: Storage) -> Storage:
        """Keys of ``self`` that *other* does not have."""
        return self._from_sorted(merge(_keep_left, _skip_both, _skip, self, other, []))

    def __or__(self, other: object) -> Storage:
        if not isinstance(other, Storage):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> Storage:
        if not isinstance(other, Storage):
            return NotImplemented
        return self.intersect(other)

    def __sub__(self, other: object) -> Storage:
        if not isinstance(other, Storage):
            return NotImplemented
        return self.diff(other)

    # -----------------------------------------------------------------------
    # Tagged form
    # -----------------------------------------------------------------------

    def to_tagged(self) -> dict[str, dict[str, Any]]:
        """Return ``{key: {"kind": ..., "value": ...}}`` in ascending key order."""
        return {key: value_to_tagged(value) for key, value in self.to_list()}

    @classmethod
    def from_tagged(cls, data: Mapping[str, Any]) -> Storage:
        """Inverse of :meth:`to_tagged`.

        Raises
        ------
        InvalidKeyError
            A key is not a ``str``.
        InvalidValueError
            An entry is not a valid tagged value.
        """
        pairs: _Pairs = []
        for key, raw in data.items():
            _check_key(key)
            try:
                pairs.append((key, value_from_tagged(raw)))
            except InvalidValueError as exc:
                _logger.debug("Rejected tagged entry %s", redact_for_log({key: raw}))
                raise InvalidValueError(f"Invalid tagged value for key {key!r}", kind=exc.kind) from exc
        return cls(pairs)

    # -----------------------------------------------------------------------
    # Python protocols
    # -----------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __contains__(self, key: object) -> bool:
        return self.member(key)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Storage):
            return NotImplemented
        return dict(self._data) == dict(other._data)

    __hash__ = None  # type: ignore[assignment]

    def __reduce__(self) -> tuple[type[Storage], tuple[list[tuple[str, Value]]]]:
        # pickle, copy.copy and copy.deepcopy all rebuild through __init__.
        return (type(self), (self.to_list(),))

    def __repr__(self) -> str:
        return f"Storage({self.to_list()!r})"


def union_all(*storages: Storage) -> Storage:
    """Left-biased union of any number of storages.

    The first storage that has a key decides its value, so sources can be
    listed from highest to lowest precedence::

        settings = union_all(cli_overrides, environment, file_defaults)
    """
    result = Storage.empty()
    for storage in storages:
        result = result.union(storage)
    return result
