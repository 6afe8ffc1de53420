from __future__ import annotations

"""Tray icon and desktop notifications for the timer."""

import logging

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import QSystemTrayIcon


logger = logging.getLogger(__name__)

APP_TITLE = "Pomodoro Clock"
NOTIFICATION_TIMEOUT_MS = 8000


def make_tray_icon(color: str = "#e2583e") -> QIcon:
    """Draws a small tomato-coloured disc instead of loading an image file."""
    pixmap = QPixmap(16, 16)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setBrush(QBrush(QColor(color)))
    painter.setPen(Qt.PenStyle.NoPen)
    painter.drawEllipse(0, 0, 16, 16)
    painter.end()
    return QIcon(pixmap)


class TrayStatusSink(QObject):
    status_changed = pyqtSignal(str)

    def __init__(self, tray: QSystemTrayIcon | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tray = tray
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def publish_status(self, text: str) -> None:
        if self._tray is not None:
            self._tray.setToolTip(f"{APP_TITLE} {text}".strip())
            if not self._tray.isVisible():
                self._tray.show()
        if text != self._text:
            self._text = text
            self.status_changed.emit(text)


class TrayNotifier:
    def __init__(self, tray: QSystemTrayIcon | None = None) -> None:
        self._tray = tray

    def notify(self, title: str, body: str) -> None:
        if self._tray is None or not QSystemTrayIcon.supportsMessages():
            logger.info("Notification: %s - %s", title, body)
            return
        self._tray.showMessage(title, body, self._tray.icon(), NOTIFICATION_TIMEOUT_MS)

