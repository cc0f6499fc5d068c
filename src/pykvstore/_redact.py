"""Helpers for safe debug logging.

Storages typically carry application configuration, which regularly holds
credentials. Anything a storage contributes to a log line goes through
:func:`redact_for_log` first.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

_SENSITIVE_KEY_PARTS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "apikey",
        "api_key",
        "credential",
        "authorization",
        "cookie",
        "private_key",
    }
)


def is_sensitive_key(key: str) -> bool:
    """Return ``True`` if the last dotted segment of *key* looks like a secret.

    ``"db.password"`` and ``"service.api_key"`` are sensitive,
    ``"token_ttl.comment"`` is not.
    """
    leaf = key.rsplit(".", 1)[-1].lower()
    return any(part in leaf for part in _SENSITIVE_KEY_PARTS)


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, BaseModel):
        return redact_for_log(value.model_dump(), max_string=max_string, _depth=_depth + 1)

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if is_sensitive_key(key):
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
