from __future__ import annotations

"""Recurring one-second ticks on the Qt event loop."""

from typing import Callable

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class QtTickHandle:
    """Owns one repeating QTimer; a cancelled handle drops any queued timeout."""

    def __init__(self, callback: Callable[[], None], interval_ms: int, parent: QObject | None = None) -> None:
        self._callback = callback
        self._active = True
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)
        self._timer.start()

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._timer.stop()
        self._timer.timeout.disconnect(self._on_timeout)
        self._timer.deleteLater()

    def _on_timeout(self) -> None:
        if self._active:
            self._callback()


class QtTicker:
    def __init__(self, interval_ms: int = TICK_INTERVAL_MS, parent: QObject | None = None) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._interval_ms = interval_ms
        self._parent = parent

    def arm(self, callback: Callable[[], None]) -> QtTickHandle:
        return QtTickHandle(callback, self._interval_ms, self._parent)
