"""Delivery through the Qt system tray (QSystemTrayIcon.showMessage).

Qt objects must only be touched from the GUI thread while the display
manager blocks some other thread, so every request goes through a small
QObject bridge whose signals are queued onto the GUI thread. A click on the
balloon counts as an activation; when the display time runs out the session
ends as a timed-out dismissal.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal as Signal
from PyQt6.QtWidgets import QSystemTrayIcon

from ..errors import DeliveryError
from ..models.document import ToastDocument
from ..models.outcome import DismissalReason
from .delivery import DeliveryHandlers
from .notifier import display_ms, summarize

log = logging.getLogger(__name__)


class _TrayBridge(QObject):
    show_requested = Signal(str, str, int)
    closed = Signal()

    def __init__(self, tray: QSystemTrayIcon) -> None:
        super().__init__()
        self._tray = tray
        self._handlers: Optional[DeliveryHandlers] = None
        self.show_requested.connect(self._show)
        tray.messageClicked.connect(self._on_clicked)

    def arm(self, handlers: DeliveryHandlers) -> None:
        self._handlers = handlers

    def _show(self, title: str, message: str, msecs: int) -> None:
        try:
            self._tray.showMessage(title, message, QSystemTrayIcon.MessageIcon.Information, msecs)
        except Exception as e:
            log.warning("Tray notification failed: %s", e)
            if self._handlers is not None:
                self._handlers.on_failed(e)
            return
        QTimer.singleShot(msecs, self._on_expired)

    def _on_clicked(self) -> None:
        if self._handlers is not None:
            self._handlers.on_activated()

    def _on_expired(self) -> None:
        if self._handlers is not None:
            self._handlers.on_dismissed(DismissalReason.TIMED_OUT)


class TrayDeliveryService:
    """Create on the GUI thread; ``submit`` may then be called from any thread."""

    def __init__(self, tray: QSystemTrayIcon) -> None:
        self._tray = tray
        self._bridge = _TrayBridge(tray)

    @property
    def closed(self):
        """Signal emitted by ``close()``; connect it to QApplication.quit."""
        return self._bridge.closed

    def submit(self, application_id: str, document: ToastDocument, handlers: DeliveryHandlers) -> None:
        if not QSystemTrayIcon.isSystemTrayAvailable():
            raise DeliveryError("No system tray is available on this desktop")
        if not QSystemTrayIcon.supportsMessages():
            raise DeliveryError("The system tray does not support notification messages")
        title, message = summarize(document)
        self._bridge.arm(handlers)
        log.debug("Queueing tray notification for %s", application_id)
        self._bridge.show_requested.emit(title or application_id, message, display_ms(document))

    def close(self) -> None:
        self._bridge.closed.emit()
