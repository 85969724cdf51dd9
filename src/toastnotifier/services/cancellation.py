from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Callable, List, Optional

from apscheduler.job import Job

from . import scheduler

log = logging.getLogger(__name__)


class CancellationSignal:
    """A flag that flips once and tells its listeners.

    Listeners registered after the flip are called right away. Deadlines set
    with ``cancel_after`` run on the shared scheduler thread; ``close()``
    drops a deadline that has not fired yet.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []
        self._deadline: Optional[Job] = None

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationSignal":
        signal = cls()
        signal.cancel_after(seconds)
        return signal

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks, self._callbacks = self._callbacks, []
        log.debug("Cancellation requested")
        for callback in callbacks:
            callback()

    def cancel_after(self, seconds: float) -> None:
        with self._lock:
            if self._deadline is not None:
                scheduler.cancel_job(self._deadline)
            self._deadline = scheduler.schedule_once(timedelta(seconds=seconds), self.cancel)
        log.debug("Cancellation deadline set to %ss", seconds)

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` on cancellation; returns a function that unregisters it."""
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)
        callback()
        return lambda: None

    def _unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                pass

    def close(self) -> None:
        with self._lock:
            deadline, self._deadline = self._deadline, None
        if deadline is not None:
            scheduler.cancel_job(deadline)

    def __enter__(self) -> "CancellationSignal":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
