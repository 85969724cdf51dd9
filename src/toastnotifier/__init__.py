"""Build toast notification documents and show them synchronously."""
from __future__ import annotations

from .errors import DeliveryError, StateError, ToastNotifierError, ValidationError
from .models.document import ToastDocument
from .models.outcome import DismissalReason, DisplayOutcome, OutcomeKind
from .services.builder import Duration, NotificationBuilder
from .services.cancellation import CancellationSignal
from .services.display import SynchronousDisplayManager

__version__ = "1.0.0"

__all__ = [
    "CancellationSignal",
    "DeliveryError",
    "DismissalReason",
    "DisplayOutcome",
    "Duration",
    "NotificationBuilder",
    "OutcomeKind",
    "StateError",
    "SynchronousDisplayManager",
    "ToastDocument",
    "ToastNotifierError",
    "ValidationError",
]
