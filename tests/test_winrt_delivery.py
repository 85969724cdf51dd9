import sys
import types

import pytest

from toastnotifier.errors import DeliveryError
from toastnotifier.models.outcome import DismissalReason, DisplayOutcome, OutcomeKind
from toastnotifier.models.templates import Template
from toastnotifier.services.builder import NotificationBuilder
from toastnotifier.services.delivery import DeliveryHandlers
from toastnotifier.services.display import SynchronousDisplayManager
from toastnotifier.services.winrt_delivery import WinRTDeliveryService


class DummyXmlDocument:
    def __init__(self):
        self.xml = None

    def load_xml(self, xml):
        self.xml = xml


class DummyToast:
    def __init__(self, xml_document):
        self.xml_document = xml_document
        self.handlers = {}

    def add_activated(self, handler):
        self.handlers["activated"] = handler

    def add_dismissed(self, handler):
        self.handlers["dismissed"] = handler

    def add_failed(self, handler):
        self.handlers["failed"] = handler


class DummyNotifier:
    def __init__(self, app_id, on_show):
        self.app_id = app_id
        self._on_show = on_show

    def show(self, toast):
        self._on_show(self.app_id, toast)


class DummyManager:
    shown = []
    on_show = None

    @classmethod
    def create_toast_notifier(cls, app_id):
        def _record(app_id, toast):
            cls.shown.append((app_id, toast))
            if cls.on_show is not None:
                cls.on_show(toast)

        return DummyNotifier(app_id, _record)


@pytest.fixture
def winrt_modules(monkeypatch):
    dom = types.ModuleType("winrt.windows.data.xml.dom")
    dom.XmlDocument = DummyXmlDocument
    notifications = types.ModuleType("winrt.windows.ui.notifications")
    notifications.ToastNotification = DummyToast
    notifications.ToastNotificationManager = DummyManager
    for name in ("winrt", "winrt.windows", "winrt.windows.data", "winrt.windows.data.xml", "winrt.windows.ui"):
        monkeypatch.setitem(sys.modules, name, types.ModuleType(name))
    monkeypatch.setitem(sys.modules, "winrt.windows.data.xml.dom", dom)
    monkeypatch.setitem(sys.modules, "winrt.windows.ui.notifications", notifications)
    DummyManager.shown = []
    DummyManager.on_show = None
    return DummyManager


def _doc():
    return NotificationBuilder(Template.TOAST_TEXT_01).set_text_line(1, "Hello").build()


def test_submit_loads_document_and_shows(winrt_modules):
    doc = _doc()
    DummyManager.on_show = lambda toast: toast.handlers["activated"](toast, object())
    manager = SynchronousDisplayManager(doc, WinRTDeliveryService())
    outcome = manager.show_and_wait("ToastNotifier.Test")
    assert outcome == DisplayOutcome.activated()
    ((app_id, toast),) = DummyManager.shown
    assert app_id == "ToastNotifier.Test"
    assert toast.xml_document.xml == doc.xml


def test_dismissal_reason_comes_from_event_args(winrt_modules):
    args = types.SimpleNamespace(reason=1)
    DummyManager.on_show = lambda toast: toast.handlers["dismissed"](toast, args)
    outcome = SynchronousDisplayManager(_doc(), WinRTDeliveryService()).show_and_wait("App")
    assert outcome.reason is DismissalReason.APPLICATION_HIDDEN


def test_failure_carries_hresult(winrt_modules):
    args = types.SimpleNamespace(error_code=-2147024891)
    DummyManager.on_show = lambda toast: toast.handlers["failed"](toast, args)
    manager = SynchronousDisplayManager(_doc(), WinRTDeliveryService())
    with pytest.raises(DeliveryError, match="0x80070005"):
        manager.show_and_wait("App")


def test_failure_returned_when_not_throwing(winrt_modules):
    args = types.SimpleNamespace(error_code=None)
    DummyManager.on_show = lambda toast: toast.handlers["failed"](toast, args)
    outcome = SynchronousDisplayManager(_doc(), WinRTDeliveryService()).show_and_wait("App", throw_on_fail=False)
    assert outcome.kind is OutcomeKind.FAILED
    assert outcome.error is None


def test_missing_winrt_packages(monkeypatch):
    monkeypatch.setitem(sys.modules, "winrt.windows.data.xml.dom", None)
    with pytest.raises(DeliveryError, match="winrt"):
        WinRTDeliveryService()


def test_finished_toasts_are_released(winrt_modules):
    service = WinRTDeliveryService()
    DummyManager.on_show = lambda toast: toast.handlers["dismissed"](toast, types.SimpleNamespace(reason=0))
    SynchronousDisplayManager(_doc(), service).show_and_wait("App")
    assert service.pending == 0


def test_toast_kept_until_an_event_fires(winrt_modules):
    service = WinRTDeliveryService()
    handlers = DeliveryHandlers(on_activated=lambda: None, on_dismissed=lambda r: None, on_failed=lambda e: None)
    service.submit("App", _doc(), handlers)
    assert service.pending == 1
    ((_, toast),) = DummyManager.shown
    toast.handlers["activated"](toast, object())
    assert service.pending == 0
