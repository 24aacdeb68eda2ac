"""Schema validation for configuration models.

Documents produced by :func:`voboost_config.parser.parse` are already
checked while pydantic builds them. :func:`validate` re-checks an existing
instance against the field table, which also covers models created
without validation (``Config.model_construct`` or
``model_copy(update=...)``).
"""

from __future__ import annotations

import logging

from voboost_config.exceptions import ConfigValidationError
from voboost_config.fields import FIELDS, SECTIONS
from voboost_config.models import Config

_logger = logging.getLogger(__name__)


def validate(config: Config) -> None:
    """Raise :class:`ConfigValidationError` on the first illegal value.

    Absent sections and fields are always legal. Values are never
    clamped or replaced.
    """
    if not isinstance(config, Config):
        raise ConfigValidationError(f"Expected Config, got {type(config).__name__}", value=config)

    for section in SECTIONS:
        value = section.getter(config)
        if value is not None and not isinstance(value, section.model):
            raise ConfigValidationError(
                f"{section.key}: expected a {section.model.__name__}, got {type(value).__name__}",
                field=section.key,
                value=value,
            )

    for spec in FIELDS:
        value = spec.get(config)
        problem = spec.violation(value)
        if problem is not None:
            raise ConfigValidationError(problem, field=spec.path, value=value)


def is_valid_config(config: Config) -> bool:
    """Return ``True`` when *config* passes :func:`validate`."""
    try:
        validate(config)
    except ConfigValidationError as exc:
        _logger.debug("Configuration rejected: %s", exc)
        return False
    return True
