"""Single-thread debounced reload worker."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

_logger = logging.getLogger(__name__)


class DebouncedWorker:
    """Run *action* once after triggers stop arriving for *interval* seconds.

    Every :meth:`trigger` pushes the deadline back, so a burst of events
    collapses into one call. *action* always runs on the worker's own
    thread, one call at a time; triggers that arrive while it is running
    schedule exactly one follow-up call.
    """

    def __init__(
        self,
        action: Callable[[], None],
        *,
        interval: float,
        name: str = "voboost-config-reload",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._action = action
        self._interval = interval
        self._clock = clock
        self._cond = threading.Condition()
        self._deadline: float | None = None
        self._stopped = False
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def thread(self) -> threading.Thread:
        return self._thread

    @property
    def pending(self) -> bool:
        """Whether a trigger is waiting for its quiet period to elapse."""
        with self._cond:
            return self._deadline is not None

    def start(self) -> None:
        self._thread.start()

    def trigger(self) -> None:
        with self._cond:
            if self._stopped:
                return
            self._deadline = self._clock() + self._interval
            self._cond.notify()

    def stop(self, *, timeout: float | None = None) -> None:
        """Drop pending triggers and wait for the worker thread to exit.

        Safe to call from *action* itself; the join is skipped in that case.
        """
        with self._cond:
            self._stopped = True
            self._deadline = None
            self._cond.notify()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout)

    def _wait_for_deadline(self) -> bool:
        with self._cond:
            while True:
                if self._stopped:
                    return False
                if self._deadline is None:
                    self._cond.wait()
                    continue
                remaining = self._deadline - self._clock()
                if remaining > 0:
                    self._cond.wait(remaining)
                    continue
                self._deadline = None
                return True

    def _run(self) -> None:
        while self._wait_for_deadline():
            try:
                self._action()
            except Exception:
                _logger.warning("Debounced action failed", exc_info=True)
