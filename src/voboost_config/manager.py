"""Configuration manager: load, watch, diff and notify.

:class:`ConfigManager` keeps one *last known good* :class:`Config`, the
most recent document that parsed and validated. ``load_config`` replaces
it synchronously. ``start_watching`` observes the file's directory with
watchdog; matching events are debounced on a single worker thread which
re-parses the file, diffs it against the last known good state and
notifies the listener. Failed reloads never touch the stored state.

Threads involved while watching:

* the watchdog observer thread, which only signals the worker;
* the reload worker (:class:`~voboost_config._debounce.DebouncedWorker`),
  which parses, diffs and hands notifications to the dispatcher.

Notifications are delivered serially, in reload order, through the
``dispatcher`` callable (by default a direct call on the worker thread;
pass ``loop.call_soon_threadsafe`` to deliver on an asyncio loop). Each
subscription carries a generation number that is re-checked at delivery
time, so nothing reaches the listener once ``stop_watching`` returned.
"""

from __future__ import annotations

import enum
import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from voboost_config import differ, validator
from voboost_config._debounce import DebouncedWorker
from voboost_config._watch import ConfigFileEventHandler, ObserverFactory, default_observer_factory
from voboost_config.events import ConfigChangeEvent, ConfigChangeListener
from voboost_config.exceptions import VoboostConfigError, WatchAlreadyActiveError, WatchSetupError
from voboost_config.fields import field_spec
from voboost_config.models import Config, ConfigDiff
from voboost_config.options import ManagerOptions
from voboost_config.parser import parse_file

_logger = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], None]], Any]

# Upper bound for joining watcher threads on stop.
_JOIN_TIMEOUT_SECONDS = 5.0


def _call_now(callback: Callable[[], None]) -> None:
    callback()


class WatchState(enum.StrEnum):
    IDLE = "idle"
    WATCHING = "watching"


@dataclass(frozen=True)
class WatchSubscription:
    """The single active file watch of a manager."""

    path: Path
    generation: int
    listener: ConfigChangeListener = field(repr=False)
    observer: Any = field(repr=False, compare=False)
    worker: DebouncedWorker = field(repr=False, compare=False)


class ConfigManager:
    """Own the last known good configuration and keep it in sync with a file.

    Parameters
    ----------
    options : ManagerOptions or None
        Debounce window, file encoding and first-reload policy.
    dispatcher : callable or None
        Receives a zero-argument callable for every notification and must
        run it, in submission order. Defaults to calling it immediately on
        the reload worker thread.
    observer_factory : callable
        Builds the watchdog observer. Tests substitute a fake.
    """

    def __init__(
        self,
        options: ManagerOptions | None = None,
        *,
        dispatcher: Dispatcher | None = None,
        observer_factory: ObserverFactory = default_observer_factory,
    ) -> None:
        self._options = options or ManagerOptions()
        self._dispatch: Dispatcher = dispatcher or _call_now
        self._observer_factory = observer_factory

        # Lock order: _delivery_lock before _watch_lock. _state_lock is never
        # held while acquiring either of them.
        self._delivery_lock = threading.RLock()
        self._watch_lock = threading.Lock()
        self._state_lock = threading.RLock()

        self._last_good: Config | None = None
        self._subscription: WatchSubscription | None = None
        self._generation = 0
        self._sequence = itertools.count(1)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def options(self) -> ManagerOptions:
        return self._options

    @property
    def current_config(self) -> Config | None:
        """The last known good configuration, or ``None`` before the first success."""
        with self._state_lock:
            return self._last_good

    @property
    def subscription(self) -> WatchSubscription | None:
        return self._subscription

    @property
    def state(self) -> WatchState:
        return WatchState.WATCHING if self._subscription is not None else WatchState.IDLE

    @property
    def is_watching(self) -> bool:
        return self._subscription is not None

    # ------------------------------------------------------------------
    # Synchronous loading
    # ------------------------------------------------------------------

    def load_config(self, path: str | Path) -> Config:
        """Parse and validate *path*, store it as last known good and return it.

        On failure the stored state is left untouched and the error is
        raised (:class:`ConfigIoError`, :class:`ConfigParseError` or
        :class:`ConfigValidationError`). Never notifies the listener.
        """
        with self._state_lock:
            config = parse_file(path, encoding=self._options.encoding)
            self._last_good = config
        _logger.info("Configuration loaded from %s", path)
        return config

    # ------------------------------------------------------------------
    # Watching
    # ------------------------------------------------------------------

    def start_watching(self, path: str | Path, listener: ConfigChangeListener) -> None:
        """Watch *path* and notify *listener* after every reload.

        Raises
        ------
        WatchAlreadyActiveError
            A subscription is already active; call :meth:`stop_watching`
            first.
        WatchSetupError
            The parent directory is missing or the observer could not be
            started.
        """
        target = Path(path).absolute()
        directory = target.parent

        with self._delivery_lock, self._watch_lock:
            if self._subscription is not None:
                raise WatchAlreadyActiveError(
                    f"Already watching {self._subscription.path}",
                    path=self._subscription.path,
                )
            if not directory.is_dir():
                raise WatchSetupError(f"Cannot watch {target}: directory {directory} does not exist", path=directory)

            self._generation += 1
            generation = self._generation
            worker = DebouncedWorker(
                lambda: self._reload(generation),
                interval=self._options.debounce_seconds,
                name=f"voboost-config-reload-{generation}",
            )
            handler = ConfigFileEventHandler(target, worker.trigger)
            worker.start()
            try:
                observer = self._observer_factory()
                observer.schedule(handler, str(directory), recursive=False)
                observer.start()
            except (OSError, RuntimeError) as exc:
                worker.stop(timeout=_JOIN_TIMEOUT_SECONDS)
                raise WatchSetupError(f"Cannot watch {directory}: {exc}", path=directory) from exc

            self._subscription = WatchSubscription(
                path=target,
                generation=generation,
                listener=listener,
                observer=observer,
                worker=worker,
            )
        _logger.info("Watching configuration file %s", target)

    def stop_watching(self) -> None:
        """Cancel the active subscription, if any.

        Idempotent. Waits for a listener call already in progress, then
        guarantees no further call for the cancelled subscription. May be
        called from inside a listener callback.
        """
        with self._delivery_lock, self._watch_lock:
            subscription = self._subscription
            if subscription is None:
                return
            self._subscription = None
            self._generation += 1

        try:
            subscription.observer.stop()
            if subscription.observer is not threading.current_thread():
                subscription.observer.join(_JOIN_TIMEOUT_SECONDS)
        finally:
            subscription.worker.stop(timeout=_JOIN_TIMEOUT_SECONDS)
        _logger.info("Stopped watching configuration file %s", subscription.path)

    def close(self) -> None:
        self.stop_watching()

    def __enter__(self) -> ConfigManager:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Background reload path
    # ------------------------------------------------------------------

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _reload(self, generation: int) -> None:
        subscription = self._subscription
        if subscription is None or subscription.generation != generation:
            return

        try:
            with self._state_lock:
                config = parse_file(subscription.path, encoding=self._options.encoding)
                if not self._is_current(generation):
                    return
                previous = self._last_good
                change = differ.diff(
                    previous,
                    config,
                    all_changed=previous is None and self._options.notify_initial_reload,
                )
                if not differ.has_any_change(change):
                    if previous is None:
                        self._last_good = config
                    _logger.debug("Reload of %s produced no change; not notifying", subscription.path)
                    return
                self._last_good = config
                event = ConfigChangeEvent(config=config, diff=change, sequence=next(self._sequence))
        except VoboostConfigError as exc:
            _logger.warning("Reload of %s rejected, keeping last known good: %s", subscription.path, exc)
            self._deliver(generation, subscription.listener.on_config_error, exc)
            return

        _logger.info(
            "Configuration reloaded from %s (sequence=%d, changed=%s)",
            subscription.path,
            event.sequence,
            differ.changed_paths(event.diff),
        )
        self._deliver(generation, subscription.listener.on_config_changed, event)

    def _deliver(self, generation: int, callback: Callable[[Any], None], payload: Any) -> None:
        def invoke() -> None:
            with self._delivery_lock:
                if not self._is_current(generation):
                    _logger.debug("Dropping notification for cancelled subscription %d", generation)
                    return
                try:
                    callback(payload)
                except Exception:
                    _logger.warning("Configuration listener raised", exc_info=True)

        self._dispatch(invoke)

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def get_field_value(self, path: str) -> Any:
        """Read one leaf of the last known good configuration by flat path.

        Returns ``None`` when the field is unset, nothing was loaded yet,
        or *path* names no field.
        """
        spec = field_spec(path)
        if spec is None:
            _logger.debug("Unknown field path %r", path)
            return None
        return spec.get(self.current_config)

    @staticmethod
    def is_field_changed(diff: ConfigDiff | None, path: str) -> bool:
        return differ.is_field_changed(diff, path)

    @staticmethod
    def has_any_change(diff: ConfigDiff | None) -> bool:
        return differ.has_any_change(diff)

    @staticmethod
    def is_valid_config(config: Config) -> bool:
        return validator.is_valid_config(config)
