"""Show a toast and block until it settles.

The delivery service reports back through callbacks on its own thread. The
manager funnels those callbacks and the caller's cancellation signal into a
one-shot gate: whichever arrives first is the session's outcome, everything
after it is dropped.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Optional

from ..errors import DeliveryError, SessionAlreadyStarted, ToastNotifierError
from ..models.document import ToastDocument
from ..models.outcome import DismissalReason, DisplayOutcome, OutcomeKind
from .cancellation import CancellationSignal
from .delivery import DeliveryHandlers, DeliveryService

log = logging.getLogger(__name__)


class DisplayState(Enum):
    IDLE = "Idle"
    WAITING = "Waiting"
    ACTIVATED = "Activated"
    DISMISSED = "Dismissed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class _OutcomeGate:
    """Single-slot rendezvous between event threads and one waiter."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._outcome: Optional[DisplayOutcome] = None
        self._cancelled = False

    def offer(self, outcome: DisplayOutcome) -> bool:
        with self._cond:
            if self._outcome is not None or self._cancelled:
                return False
            self._outcome = outcome
            self._cond.notify_all()
            return True

    def cancel(self) -> None:
        with self._cond:
            if self._outcome is not None:
                return
            self._cancelled = True
            self._cond.notify_all()

    def wait(self) -> DisplayOutcome:
        with self._cond:
            while self._outcome is None and not self._cancelled:
                self._cond.wait()
            if self._cancelled:
                return DisplayOutcome.cancelled()
            assert self._outcome is not None
            return self._outcome


class SynchronousDisplayManager:
    """Single-use adapter from callback delivery to one blocking call."""

    def __init__(self, document: ToastDocument, delivery: DeliveryService) -> None:
        self._document = document
        self._delivery = delivery
        self._gate = _OutcomeGate()
        self._state = DisplayState.IDLE
        self._started = False
        self._state_lock = threading.Lock()

    @classmethod
    def from_builder(cls, builder, delivery: DeliveryService) -> "SynchronousDisplayManager":
        return cls(builder.build(), delivery)

    @property
    def document(self) -> ToastDocument:
        return self._document

    @property
    def state(self) -> DisplayState:
        return self._state

    # Delivery callbacks; safe to call from any thread, any number of times

    def _on_activated(self) -> None:
        self._record(DisplayOutcome.activated())

    def _on_dismissed(self, reason: object = None) -> None:
        self._record(DisplayOutcome.dismissed(DismissalReason.from_platform(reason)))

    def _on_failed(self, error: object = None) -> None:
        self._record(DisplayOutcome.failed(error))

    def _record(self, outcome: DisplayOutcome) -> None:
        if self._gate.offer(outcome):
            log.debug("Notification outcome recorded: %s", outcome)
        else:
            log.debug("Ignoring late notification event: %s", outcome)

    def _begin(self) -> None:
        with self._state_lock:
            if self._started:
                raise SessionAlreadyStarted()
            self._started = True

    def show_and_wait(
        self,
        application_id: str,
        cancellation: Optional[CancellationSignal] = None,
        throw_on_fail: bool = True,
    ) -> DisplayOutcome:
        """Submit the document and wait for activation, dismissal, failure or cancellation.

        A failure while submitting is raised straight away as DeliveryError.
        A Failed outcome is raised as DeliveryError when ``throw_on_fail`` is
        set and returned otherwise. Cancellation is a normal outcome and
        never raises.
        """
        self._begin()
        handlers = DeliveryHandlers(
            on_activated=self._on_activated,
            on_dismissed=self._on_dismissed,
            on_failed=self._on_failed,
        )

        unregister = cancellation.register(self._gate.cancel) if cancellation is not None else None
        try:
            log.info("Showing notification as %s", application_id)
            try:
                self._delivery.submit(application_id, self._document, handlers)
            except Exception as e:
                self._state = DisplayState.FAILED
                if isinstance(e, ToastNotifierError):
                    raise
                raise DeliveryError(f"Showing the notification failed: {e}", error=e) from e
            self._state = DisplayState.WAITING
            outcome = self._gate.wait()
        finally:
            if unregister is not None:
                unregister()

        self._state = DisplayState(outcome.kind.value)
        log.info("Notification finished: %s", outcome)

        if outcome.kind is OutcomeKind.FAILED and throw_on_fail:
            error = outcome.error
            if isinstance(error, BaseException):
                raise DeliveryError(f"Notification failed: {error}", error=error) from error
            if error is not None:
                raise DeliveryError(f"Notification failed: {error}", error=error)
            raise DeliveryError("Notification failed for unknown reason!")
        return outcome
