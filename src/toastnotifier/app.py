"""Qt wiring for the tray backend.

Creates (or reuses) the QApplication and the tray icon the tray delivery
service shows its balloons from.
"""
from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import QApplication, QStyle, QSystemTrayIcon


def build_app(existing: Optional[QApplication] = None) -> QApplication:
    """Return a QApplication instance, creating one if needed.

    Closing windows must not end the app; it quits once the session is over.
    """
    app = existing or QApplication.instance()  # type: ignore[assignment]
    if app is None:
        app = QApplication([])
    app.setQuitOnLastWindowClosed(False)
    return app


def create_tray_icon(app: QApplication, tooltip: str = "ToastNotifier") -> QSystemTrayIcon:
    icon = app.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
    tray = QSystemTrayIcon(icon, app)
    tray.setToolTip(tooltip)
    tray.show()
    return tray
