"""Manager options for voboost_config."""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import Any

_logger = logging.getLogger(__name__)

_FLAG_WORDS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def _env_flag(name: str, default: bool) -> bool:
    """Read boolean environment variable *name*, keeping *default* when unset or unrecognised."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    flag = _FLAG_WORDS.get(raw.strip().lower())
    if flag is None:
        _logger.warning("Ignoring %s=%r; expected one of %s", name, raw, ", ".join(_FLAG_WORDS))
        return default
    return flag


@dataclasses.dataclass(frozen=True)
class ManagerOptions:
    """Tunables for :class:`~voboost_config.manager.ConfigManager`.

    Parameters
    ----------
    debounce_seconds : float
        Quiet period after the last file event before a reload runs.
        Editors can emit several modify/move events for a single save;
        all events inside the window collapse into one reload.
    encoding : str
        Text encoding of the configuration file.
    notify_initial_reload : bool
        When a watch-triggered reload succeeds before anything was
        accepted (no prior ``load_config``), report every present field
        as changed. When ``False`` such a reload only sets the baseline
        and notifies nobody.
    """

    debounce_seconds: float = 0.15
    encoding: str = "utf-8"
    notify_initial_reload: bool = True

    def __post_init__(self) -> None:
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds must be >= 0")

    @classmethod
    def from_env(cls, **overrides: Any) -> ManagerOptions:
        """Create options from ``VOBOOST_CONFIG_*`` environment variables.

        Reads ``VOBOOST_CONFIG_DEBOUNCE_MS``, ``VOBOOST_CONFIG_ENCODING``
        and ``VOBOOST_CONFIG_NOTIFY_INITIAL``. Explicit keyword arguments
        override environment values.
        """
        env = os.environ
        kwargs: dict[str, Any] = {}

        debounce_env = env.get("VOBOOST_CONFIG_DEBOUNCE_MS")
        if debounce_env is not None and "debounce_seconds" not in overrides:
            kwargs["debounce_seconds"] = float(debounce_env) / 1000.0

        encoding_env = env.get("VOBOOST_CONFIG_ENCODING")
        if encoding_env is not None and "encoding" not in overrides:
            kwargs["encoding"] = encoding_env

        if "notify_initial_reload" not in overrides:
            kwargs["notify_initial_reload"] = _env_flag("VOBOOST_CONFIG_NOTIFY_INITIAL", True)

        kwargs.update(overrides)
        return cls(**kwargs)
