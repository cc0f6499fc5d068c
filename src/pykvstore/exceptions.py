"""Custom exception hierarchy for pykvstore.

Lookups never raise: a missing key or a variant mismatch is reported as
``None``.  These exceptions only guard the construction boundary, where a
caller hands in something that cannot be represented at all.
"""

from __future__ import annotations


class KvStoreError(Exception):
    """Base exception for all pykvstore errors."""


class InvalidValueError(KvStoreError, TypeError):
    """Payload does not fit the requested value variant."""

    def __init__(self, message: str, *, kind: str = "") -> None:
        self.kind = kind
        super().__init__(message)


class InvalidKeyError(KvStoreError, TypeError):
    """Storage keys must be ``str``."""

    def __init__(self, message: str, *, key: object = None) -> None:
        self.key = key
        super().__init__(message)
