"""Base model for pykvstore values.

Every value variant inherits from :class:`KvBaseModel`, which provides:

* ``frozen=True`` so a value can never change after construction.
* ``extra="forbid"`` so the tagged form has exactly two keys.

Payload fields use pydantic's ``Strict*`` types so nothing is coerced
across types (``"1"`` is not an int, ``True`` is not an int or a float).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class KvBaseModel(BaseModel):
    """Base for pykvstore value models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
