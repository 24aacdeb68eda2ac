"""Copy the bundled default configuration into a writable location.

This sits outside :class:`~voboost_config.manager.ConfigManager`: the
manager only ever reads the file it is pointed at.
"""

from __future__ import annotations

import importlib.resources
import logging
import shutil
from pathlib import Path

from voboost_config.exceptions import ProvisioningError

_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_RESOURCE = "data/default_config.yaml"


def default_config_text() -> str:
    """Return the bundled default configuration document."""
    try:
        ref = importlib.resources.files("voboost_config").joinpath(DEFAULT_CONFIG_RESOURCE)
        return ref.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ProvisioningError(f"{DEFAULT_CONFIG_RESOURCE} not found in package data") from exc


def copy_default_config_if_needed(target: str | Path, *, source: str | Path | None = None) -> bool:
    """Create *target* from the default configuration unless it already exists.

    Parameters
    ----------
    target : str or Path
        Where the editable configuration should live.
    source : str or Path or None
        File to copy instead of the bundled default.

    Returns
    -------
    bool
        ``True`` when a file was written, ``False`` when *target* existed.
    """
    target = Path(target)
    if target.exists():
        _logger.debug("Configuration already present at %s", target)
        return False

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if source is not None:
            _logger.debug("Copying default configuration from %s", source)
            shutil.copyfile(source, target)
        else:
            _logger.debug("Writing bundled default configuration")
            target.write_text(default_config_text(), encoding="utf-8")
    except OSError as exc:
        raise ProvisioningError(f"Cannot create default configuration at {target}: {exc}", path=target) from exc

    _logger.info("Default configuration written to %s", target)
    return True
