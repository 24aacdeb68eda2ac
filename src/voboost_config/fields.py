"""Flat field-path table for the configuration schema.

Each leaf of :class:`~voboost_config.models.Config` is described once by a
:class:`FieldSpec`: its flat path (``settingsInterfaceShiftX``), its
on-disk location (``settings.interface-shift-x``), a getter, a comparator
and its legal values. The table is built from the pydantic model
definitions at import time and is the only place that maps a path string
to a nested attribute. The differ, the validator and the manager's
``get_field_value`` / ``is_field_changed`` all read it.

Getters are shape-generic: the same getter reads a value from a
``Config`` and a :class:`~voboost_config.models.FieldChange` from a
``ConfigDiff``, because the diff mirrors the configuration's layout.
"""

from __future__ import annotations

import operator
import types
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Annotated, Any, Union, get_args, get_origin

import annotated_types
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo

from voboost_config.models import Config, ConfigEnum
from voboost_config.models.diff import unwrap_optional

__all__ = [
    "FIELDS",
    "SECTIONS",
    "FieldSpec",
    "SectionSpec",
    "field_path",
    "field_paths",
    "field_spec",
]

Getter = Callable[[Any], Any]
Comparator = Callable[[Any, Any], bool]


def field_path(section: str, name: str) -> str:
    """Return the flat camel-case path of ``section.name``.

    >>> field_path("settings", "interface_shift_x")
    'settingsInterfaceShiftX'
    """
    return to_camel(f"{section}_{name}")


def _section_getter(section: str) -> Getter:
    def get(document: Any) -> Any:
        if document is None:
            return None
        return getattr(document, section, None)

    return get


def _leaf_getter(section: str, name: str) -> Getter:
    get_section = _section_getter(section)

    def get(document: Any) -> Any:
        container = get_section(document)
        if container is None:
            return None
        return getattr(container, name, None)

    return get


@dataclass(frozen=True)
class SectionSpec:
    """One top-level section of the document."""

    name: str
    key: str
    model: type[BaseModel]
    getter: Getter = field(repr=False, compare=False)

    def is_present(self, document: Any) -> bool:
        return self.getter(document) is not None


@dataclass(frozen=True)
class FieldSpec:
    """One leaf field of the document."""

    path: str
    section: str
    name: str
    section_key: str
    key: str
    value_type: type
    getter: Getter = field(repr=False, compare=False)
    comparator: Comparator = field(default=operator.eq, repr=False, compare=False)
    allowed: frozenset[str] | None = None
    minimum: int | None = None
    maximum: int | None = None

    @property
    def location(self) -> str:
        """Dotted on-disk location, e.g. ``vehicle.fuel-mode``."""
        return f"{self.section_key}.{self.key}"

    def get(self, document: Any) -> Any:
        return self.getter(document)

    def same(self, previous: Any, current: Any) -> bool:
        return self.comparator(previous, current)

    def violation(self, value: Any) -> str | None:
        """Describe why *value* is illegal for this field, or ``None``."""
        if value is None:
            return None
        if self.allowed is not None:
            if not isinstance(value, str) or str(value) not in self.allowed:
                legal = ", ".join(sorted(self.allowed))
                return f"{self.location}: {value!r} is not one of {legal}"
            return None
        if isinstance(value, bool) or not isinstance(value, self.value_type):
            return f"{self.location}: expected {self.value_type.__name__}, got {type(value).__name__}"
        if self.minimum is not None and value < self.minimum:
            return f"{self.location}: {value} is below the minimum {self.minimum}"
        if self.maximum is not None and value > self.maximum:
            return f"{self.location}: {value} is above the maximum {self.maximum}"
        return None


def _constraint_items(annotation: Any) -> Iterator[Any]:
    """Yield constraint metadata nested in ``Annotated`` types, through unions."""
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        for arg in get_args(annotation):
            yield from _constraint_items(arg)
    elif origin is Annotated:
        for item in get_args(annotation)[1:]:
            if isinstance(item, FieldInfo):
                yield from item.metadata
            else:
                yield item


def _bounds(info: FieldInfo) -> tuple[int | None, int | None]:
    minimum: int | None = None
    maximum: int | None = None
    for item in [*info.metadata, *_constraint_items(info.annotation)]:
        if isinstance(item, annotated_types.Ge):
            minimum = item.ge  # type: ignore[assignment]
        elif isinstance(item, annotated_types.Le):
            maximum = item.le  # type: ignore[assignment]
    return minimum, maximum


def _build(root: type[BaseModel]) -> tuple[tuple[SectionSpec, ...], tuple[FieldSpec, ...]]:
    sections: list[SectionSpec] = []
    leaves: list[FieldSpec] = []
    for section_name, section_info in root.model_fields.items():
        section_model = unwrap_optional(section_info.annotation)
        sections.append(
            SectionSpec(
                name=section_name,
                key=section_info.alias or section_name,
                model=section_model,
                getter=_section_getter(section_name),
            )
        )
        for name, info in section_model.model_fields.items():
            value_type = unwrap_optional(info.annotation)
            is_enum = isinstance(value_type, type) and issubclass(value_type, ConfigEnum)
            allowed = value_type.tokens() if is_enum else None
            minimum, maximum = _bounds(info)
            leaves.append(
                FieldSpec(
                    path=field_path(section_name, name),
                    section=section_name,
                    section_key=section_info.alias or section_name,
                    name=name,
                    key=info.alias or name,
                    value_type=value_type,
                    getter=_leaf_getter(section_name, name),
                    allowed=allowed,
                    minimum=minimum,
                    maximum=maximum,
                )
            )
    return tuple(sections), tuple(leaves)


SECTIONS, FIELDS = _build(Config)

_BY_PATH: MappingProxyType[str, FieldSpec] = MappingProxyType(
    {spec.path: spec for spec in FIELDS} | {spec.location: spec for spec in FIELDS}
)


def field_spec(path: str) -> FieldSpec | None:
    """Look up a leaf by flat path (``settingsTheme``) or location (``settings.theme``)."""
    if not isinstance(path, str):
        return None
    return _BY_PATH.get(path.strip())


def field_paths() -> list[str]:
    """Return every flat field path in schema order."""
    return [spec.path for spec in FIELDS]
