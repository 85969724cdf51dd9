"""Delivery service boundary and backend selection.

A delivery service takes a finished document and later calls exactly one of
the handlers, possibly from a thread it owns, or none at all.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from ..errors import DeliveryError
from ..models.document import ToastDocument

log = logging.getLogger(__name__)

BACKENDS = ("auto", "winrt", "tray", "console")


@dataclass(frozen=True)
class DeliveryHandlers:
    on_activated: Callable[[], None]
    on_dismissed: Callable[[object], None]
    on_failed: Callable[[object], None]


class DeliveryService(Protocol):
    def submit(self, application_id: str, document: ToastDocument, handlers: DeliveryHandlers) -> None:
        ...


def create_delivery_service(backend: str = "auto", **kwargs: Any) -> DeliveryService:
    """Instantiate the named backend.

    ``auto`` means WinRT toasts on Windows and the console everywhere else.
    The tray backend needs a ``tray`` keyword (a QSystemTrayIcon).
    """
    name = backend.strip().lower()
    if name == "auto":
        name = "winrt" if sys.platform.startswith("win") else "console"
        log.debug("Auto-selected delivery backend %s", name)

    if name == "winrt":
        from .winrt_delivery import WinRTDeliveryService

        return WinRTDeliveryService()
    if name == "tray":
        from .tray import TrayDeliveryService

        if "tray" not in kwargs:
            raise DeliveryError("The tray backend needs a system tray icon")
        return TrayDeliveryService(kwargs["tray"])
    if name == "console":
        from .notifier import ConsoleDeliveryService

        return ConsoleDeliveryService()
    raise DeliveryError(f"Unknown delivery backend '{backend}' (available: {', '.join(BACKENDS)})")
