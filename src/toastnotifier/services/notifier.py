"""Console delivery and helpers shared by the non-WinRT backends.

Hosts without native toasts get the notification printed to stderr. The
console cannot be clicked or closed, so the session ends right away with an
unspecified dismissal.
"""
from __future__ import annotations

import logging
import sys
from typing import TextIO, Tuple

from ..models.document import ToastDocument
from ..models.outcome import DismissalReason
from .delivery import DeliveryHandlers

log = logging.getLogger(__name__)

NORMAL_DISPLAY_MS = 7_000
LONG_DISPLAY_MS = 25_000


def summarize(document: ToastDocument) -> Tuple[str, str]:
    """Split a document into (title, message): first text line, then the rest."""
    texts = [t for t in document.texts if t]
    if not texts:
        return "", ""
    return texts[0], "\n".join(texts[1:])


def display_ms(document: ToastDocument) -> int:
    return LONG_DISPLAY_MS if document.is_long else NORMAL_DISPLAY_MS


class ConsoleDeliveryService:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def submit(self, application_id: str, document: ToastDocument, handlers: DeliveryHandlers) -> None:
        title, message = summarize(document)
        stream = self._stream or sys.stderr
        print(f"[Notification] {title}: {message}", file=stream)
        log.debug("Printed notification for %s to the console", application_id)
        handlers.on_dismissed(DismissalReason.UNSPECIFIED)
