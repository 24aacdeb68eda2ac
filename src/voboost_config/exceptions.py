"""Custom exception hierarchy for voboost_config."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class VoboostConfigError(Exception):
    """Base exception for all voboost_config errors."""


class ConfigParseError(VoboostConfigError):
    """Malformed document structure or wrong value type for a field."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        field: str | None = None,
    ) -> None:
        self.line = line
        self.field = field
        super().__init__(message)


class ConfigValidationError(VoboostConfigError):
    """A present value lies outside its declared set or range."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message)


class ConfigIoError(VoboostConfigError):
    """Configuration file missing, unreadable or not decodable."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class WatchSetupError(VoboostConfigError):
    """File-system watch subscription could not be established."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class WatchAlreadyActiveError(WatchSetupError):
    """``start_watching`` called while a subscription is already active.

    A manager owns at most one watch subscription. Call
    ``stop_watching()`` first to move the watch to another file.
    """


class ProvisioningError(VoboostConfigError):
    """The bundled default configuration could not be copied into place."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)
