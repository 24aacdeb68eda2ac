"""Sparse change models generated from the configuration schema.

:data:`ConfigDiff` mirrors :class:`~voboost_config.models.config.Config`
field for field, but every leaf holds a :class:`FieldChange` that is only
present when the value changed, and every section is only present when
something inside it changed. Nothing here is written per field: the diff
classes are derived from the section models with ``create_model``, so a
new field or section needs no additional code.
"""

from __future__ import annotations

import types
from typing import Annotated, Any, Generic, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, create_model

from voboost_config.models.config import Config

__all__ = [
    "ConfigDiff",
    "DiffBaseModel",
    "FieldChange",
    "SectionDiff",
    "build_diff_model",
    "unwrap_optional",
]

T = TypeVar("T")


class FieldChange(BaseModel, Generic[T]):
    """Old and new value of one changed field. ``None`` means absent."""

    model_config = ConfigDict(frozen=True)

    previous: T | None = None
    current: T | None = None


class DiffBaseModel(BaseModel):
    """Base for generated diff models."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class SectionDiff(DiffBaseModel):
    """Base for generated section diffs.

    ``presence`` is set when the section itself appeared in or vanished
    from the document, which is a change even if no field inside it has
    a value on either side.
    """

    presence: FieldChange[bool] | None = None


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``X | None`` and ``Annotated[X, ...]`` down to ``X``."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            annotation = args[0]
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def build_diff_model(
    model_cls: type[BaseModel],
    *,
    name: str | None = None,
    base: type[DiffBaseModel] = DiffBaseModel,
) -> type[DiffBaseModel]:
    """Derive a sparse diff model from *model_cls*.

    Nested models become nested section diffs; every other field becomes
    an optional :class:`FieldChange` of the field's value type.
    """
    fields: dict[str, Any] = {}
    for field_name, info in model_cls.model_fields.items():
        if field_name in base.model_fields:
            raise TypeError(f"{model_cls.__name__}.{field_name} collides with {base.__name__}")
        inner = unwrap_optional(info.annotation)
        if _is_model(inner):
            section_diff = build_diff_model(inner, base=SectionDiff)
            fields[field_name] = (section_diff | None, None)
        else:
            fields[field_name] = (FieldChange[inner] | None, None)  # type: ignore[valid-type]
    return create_model(  # type: ignore[call-overload,no-any-return]
        name or f"{model_cls.__name__}Diff",
        __base__=base,
        __module__=__name__,
        **fields,
    )


ConfigDiff = build_diff_model(Config, name="ConfigDiff")
"""Diff of two :class:`Config` documents. ``ConfigDiff()`` means no change."""
