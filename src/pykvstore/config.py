"""Rendering configuration for pykvstore."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class DisplayConfig:
    """Controls the lossy text rendering of values.

    Only the JSON variant is affected; strings, booleans and numbers always
    render the same way. Pass an instance explicitly to
    :func:`~pykvstore.models.value.to_display_string` or
    :meth:`~pykvstore.storage.store.Storage.get_string_unsafe`.

    Parameters
    ----------
    json_sort_keys : bool
        Emit object keys in sorted order. Defaults to ``True`` so the text
        of a document is stable regardless of how it was built.
    json_compact : bool
        Use ``(",", ":")`` separators instead of the :mod:`json` defaults.
    json_ensure_ascii : bool
        Escape non-ASCII characters.
    """

    json_sort_keys: bool = True
    json_compact: bool = True
    json_ensure_ascii: bool = False

    @property
    def json_separators(self) -> tuple[str, str] | None:
        return (",", ":") if self.json_compact else None


DEFAULT_DISPLAY_CONFIG = DisplayConfig()
