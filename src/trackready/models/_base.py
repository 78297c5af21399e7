"""Base model for trackready payloads.

Every payload model inherits from :class:`TrackingBaseModel` which
provides:

* ``alias_generator=to_camel`` so snake_case fields serialize to the
  camelCase keys listeners and sinks usually expect.
* ``populate_by_name=True`` so models can be built from either form.
* Immutability; a payload handed to one listener cannot be altered
  for the next one.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Params = dict[str, Any]
"""A parameters snapshot: string keys to arbitrary values."""


class TrackingBaseModel(BaseModel):
    """Frozen base with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase dict representation."""
        return self.model_dump(by_alias=True)
