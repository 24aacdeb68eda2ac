"""Change notifications delivered to configuration listeners.

A listener receives exactly one call per completed reload attempt:
:meth:`ConfigChangeListener.on_config_changed` when the file parsed,
validated and differs from the last accepted state, or
:meth:`ConfigChangeListener.on_config_error` when it did not parse or
validate. A reload that produces an identical configuration notifies
nobody.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from voboost_config.exceptions import VoboostConfigError
from voboost_config.models import Config, ConfigDiff


class ConfigChangeEvent(BaseModel):
    """A newly accepted configuration together with what changed."""

    model_config = ConfigDict(frozen=True)

    config: Config
    diff: ConfigDiff  # type: ignore[valid-type]
    sequence: int = Field(..., ge=1, description="Per-manager delivery order, starting at 1")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


@runtime_checkable
class ConfigChangeListener(Protocol):
    def on_config_changed(self, event: ConfigChangeEvent) -> None: ...

    def on_config_error(self, error: VoboostConfigError) -> None: ...


@dataclass(frozen=True)
class CallbackListener:
    """Adapt two plain callables to :class:`ConfigChangeListener`."""

    changed: Callable[[ConfigChangeEvent], None]
    error: Callable[[VoboostConfigError], None] | None = None

    def on_config_changed(self, event: ConfigChangeEvent) -> None:
        self.changed(event)

    def on_config_error(self, error: VoboostConfigError) -> None:
        if self.error is not None:
            self.error(error)
