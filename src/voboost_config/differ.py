"""Field-level diff between two accepted configurations.

The differ walks the field table in :mod:`voboost_config.fields` instead
of comparing sections by hand, so it follows the schema automatically.
"""

from __future__ import annotations

import logging
from typing import Any

from voboost_config.fields import FIELDS, SECTIONS, field_spec
from voboost_config.models import Config, ConfigDiff

_logger = logging.getLogger(__name__)

_EMPTY = Config()


def diff(previous: Config | None, current: Config, *, all_changed: bool = False) -> ConfigDiff:
    """Compute the sparse change set from *previous* to *current*.

    A field counts as changed when its value differs, including going
    from absent to present and back. Sections record a ``presence``
    change when they appear or vanish.

    When *previous* is ``None`` (nothing accepted yet) the result is empty
    unless *all_changed* is set, in which case *current* is compared with
    an empty document so every present field and section is reported.
    """
    if previous is None:
        if not all_changed:
            return ConfigDiff()
        previous = _EMPTY

    changes: dict[str, dict[str, Any]] = {}

    for section in SECTIONS:
        was_present = section.is_present(previous)
        is_present = section.is_present(current)
        if was_present != is_present:
            changes.setdefault(section.name, {})["presence"] = {
                "previous": was_present,
                "current": is_present,
            }

    for spec in FIELDS:
        old = spec.get(previous)
        new = spec.get(current)
        if spec.same(old, new):
            continue
        changes.setdefault(spec.section, {})[spec.name] = {"previous": old, "current": new}

    if changes:
        _logger.debug("Diff touches sections=%s", sorted(changes))
    return ConfigDiff.model_validate(changes)


def has_any_change(config_diff: ConfigDiff | None) -> bool:
    """Return ``True`` when *config_diff* records at least one change."""
    if config_diff is None:
        return False
    return any(section.getter(config_diff) is not None for section in SECTIONS)


def is_field_changed(config_diff: ConfigDiff | None, path: str) -> bool:
    """Return ``True`` when the leaf at flat *path* changed.

    Unknown paths and a ``None`` diff report ``False``.
    """
    if config_diff is None:
        return False
    spec = field_spec(path)
    if spec is None:
        _logger.debug("Unknown field path %r", path)
        return False
    return spec.get(config_diff) is not None


def changed_paths(config_diff: ConfigDiff | None) -> list[str]:
    """Return the flat paths of every changed leaf, in schema order."""
    if config_diff is None:
        return []
    return [spec.path for spec in FIELDS if spec.get(config_diff) is not None]
