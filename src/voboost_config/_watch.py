"""watchdog glue: filter directory events down to one configuration file."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

_logger = logging.getLogger(__name__)

# Events that can change what a subsequent read returns. Open/close
# notifications are ignored.
_RELEVANT_EVENT_TYPES = frozenset(
    {
        EVENT_TYPE_CREATED,
        EVENT_TYPE_DELETED,
        EVENT_TYPE_MODIFIED,
        EVENT_TYPE_MOVED,
    }
)

ObserverFactory = Callable[[], Any]
"""Returns an object with watchdog's ``schedule``/``start``/``stop``/``join``."""


def default_observer_factory() -> Any:
    return Observer()


class ConfigFileEventHandler(FileSystemEventHandler):
    """Forward events touching *target* to *on_change*.

    The handler is scheduled on the file's parent directory rather than on
    the file itself, so editors that save by writing a temporary file and
    renaming it over the original are still seen (as a move whose
    destination is the target).
    """

    def __init__(self, target: Path, on_change: Callable[[], None]) -> None:
        super().__init__()
        self._target_name = target.name
        self._on_change = on_change

    def _matches(self, raw_path: bytes | str) -> bool:
        if not raw_path:
            return False
        return Path(os.fsdecode(raw_path)).name == self._target_name

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _RELEVANT_EVENT_TYPES:
            return
        dest_path = getattr(event, "dest_path", "")
        if not (self._matches(event.src_path) or self._matches(dest_path)):
            return
        _logger.debug("Configuration file event type=%s path=%s", event.event_type, event.src_path)
        self._on_change()
