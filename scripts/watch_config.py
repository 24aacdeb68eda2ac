#!/usr/bin/env python3
"""Load a Voboost configuration file and print changes as it is edited.

Usage
-----
    python scripts/watch_config.py ~/.config/voboost/config.yaml
    python scripts/watch_config.py --provision --debounce-ms 300 config.yaml

Options::

    --provision          Write the bundled default first if PATH is missing
    --debounce-ms N      Quiet period before a reload (default: 150)
    --verbose            Enable debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from voboost_config import (  # noqa: E402
    ConfigChangeEvent,
    ConfigManager,
    ManagerOptions,
    VoboostConfigError,
    copy_default_config_if_needed,
    field_paths,
)

NOT_SET = "Not set"


def _fmt(value: Any) -> str:
    return NOT_SET if value is None else str(value)


def _print_fields(manager: ConfigManager, changed: set[str] | None = None) -> None:
    changed = changed or set()
    width = max(len(path) for path in field_paths())
    for path in field_paths():
        marker = "*" if path in changed else " "
        print(f" {marker} {path:<{width}}  {_fmt(manager.get_field_value(path))}")


class _ConsoleListener:
    def __init__(self, manager: ConfigManager) -> None:
        self._manager = manager

    def on_config_changed(self, event: ConfigChangeEvent) -> None:
        changed = {path for path in field_paths() if self._manager.is_field_changed(event.diff, path)}
        print(f"\n#{event.sequence} configuration updated ({len(changed)} field(s) changed)")
        _print_fields(self._manager, changed)

    def on_config_error(self, error: VoboostConfigError) -> None:
        print(f"\nConfiguration error, keeping previous valid state:\n  {error}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Watch a Voboost configuration file.")
    parser.add_argument("path", help="Configuration file to load and watch")
    parser.add_argument("--provision", action="store_true", help="Create PATH from the bundled default if missing")
    parser.add_argument("--debounce-ms", type=float, default=None, help="Reload debounce window in milliseconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.path).expanduser()
    overrides: dict[str, Any] = {}
    if args.debounce_ms is not None:
        overrides["debounce_seconds"] = args.debounce_ms / 1000.0
    options = ManagerOptions.from_env(**overrides)

    try:
        if args.provision:
            copy_default_config_if_needed(path)
        manager = ConfigManager(options)
        manager.load_config(path)
    except VoboostConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Configuration file: {path.resolve()}")
    _print_fields(manager)

    with manager:
        try:
            manager.start_watching(path, _ConsoleListener(manager))
        except VoboostConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print("\nWatching for changes, press Ctrl-C to stop.")
        try:
            threading.Event().wait()
        except KeyboardInterrupt:
            print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
