"""Native Windows toasts through the WinRT projection packages.

The document XML is loaded into a ``Windows.Data.Xml.Dom.XmlDocument``, wrapped
in a ``ToastNotification`` and shown by a notifier created for the
application id. The activated/dismissed/failed events fire on a WinRT thread
pool thread.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict

from ..errors import DeliveryError
from ..models.document import ToastDocument
from .delivery import DeliveryHandlers

log = logging.getLogger(__name__)


def _failure_error(args: Any) -> object:
    code = getattr(args, "error_code", None)
    if code is None or isinstance(code, BaseException):
        return code
    try:
        value = int(code) & 0xFFFFFFFF
    except (TypeError, ValueError):
        return DeliveryError(f"Toast notification failed: {code}", error=code)
    return DeliveryError(f"Toast notification failed (HRESULT 0x{value:08X})", error=code)


class WinRTDeliveryService:
    def __init__(self) -> None:
        try:
            from winrt.windows.data.xml.dom import XmlDocument
            from winrt.windows.ui.notifications import ToastNotification, ToastNotificationManager
        except ImportError as e:
            raise DeliveryError(
                "Windows toast notifications need the winrt-Windows.UI.Notifications "
                "and winrt-Windows.Data.Xml.Dom packages",
                error=e,
            ) from e
        self._xml_document = XmlDocument
        self._toast_notification = ToastNotification
        self._manager = ToastNotificationManager
        # Toasts must stay referenced while their events can still fire
        self._shown: Dict[int, Any] = {}
        self._lock = threading.Lock()

    def _release(self, toast: Any) -> None:
        with self._lock:
            self._shown.pop(id(toast), None)

    @property
    def pending(self) -> int:
        return len(self._shown)

    def _create_notifier(self, application_id: str) -> Any:
        factory = getattr(self._manager, "create_toast_notifier_with_id", None)
        if factory is None:
            factory = self._manager.create_toast_notifier
        return factory(application_id)

    def submit(self, application_id: str, document: ToastDocument, handlers: DeliveryHandlers) -> None:
        xml = self._xml_document()
        xml.load_xml(document.to_xml())
        toast = self._toast_notification(xml)

        def _activated(sender, args):
            self._release(toast)
            handlers.on_activated()

        def _dismissed(sender, args):
            self._release(toast)
            handlers.on_dismissed(getattr(args, "reason", None))

        def _failed(sender, args):
            self._release(toast)
            handlers.on_failed(_failure_error(args))

        toast.add_activated(_activated)
        toast.add_dismissed(_dismissed)
        toast.add_failed(_failed)
        with self._lock:
            self._shown[id(toast)] = toast

        try:
            self._create_notifier(application_id).show(toast)
        except Exception:
            self._release(toast)
            raise
        log.debug("Submitted toast notification for %s", application_id)
