"""Base model and enum for voboost configuration sections.

Every section model inherits from :class:`ConfigBaseModel` which
provides:

* ``alias_generator=to_kebab`` so hyphenated on-disk keys
  (``interface-shift-x``) map to snake_case fields. Python callers may
  still construct models by field name; the parser validates by alias
  only, so ``interface_shift_x`` in a file is just an unknown key.
* ``frozen=True``: a loaded configuration never changes in place.
* ``extra="ignore"``: unknown keys are skipped so older readers accept
  documents written for newer schemas.

Enumerated fields use :class:`ConfigEnum`, a closed ``StrEnum``. There
is no ``UNKNOWN`` fallback member; a token outside the set is a
validation failure.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict


def to_kebab(name: str) -> str:
    """Convert a snake_case field name to its hyphenated on-disk key."""
    return name.replace("_", "-")


class ConfigEnum(enum.StrEnum):
    """Base for closed sets of configuration tokens."""

    @classmethod
    def tokens(cls) -> frozenset[str]:
        """Return every legal on-disk token."""
        return frozenset(member.value for member in cls)


class ConfigBaseModel(BaseModel):
    """Base for configuration sections and the root document."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        validate_by_alias=True,
        validate_by_name=True,
        alias_generator=to_kebab,
    )
