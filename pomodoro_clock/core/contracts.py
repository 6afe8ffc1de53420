from __future__ import annotations

"""Narrow interfaces the timer uses to reach the outside world."""

from typing import Callable, Protocol


class ClockControl(Protocol):
    def begin_tracking(self) -> None: ...

    def end_tracking(self) -> None: ...

    def cancel_tracking(self) -> None: ...


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None: ...


class SoundPlayer(Protocol):
    def play_sound(self, path: str | None) -> None: ...


class StatusSink(Protocol):
    def publish_status(self, text: str) -> None: ...


class TickHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Ticker(Protocol):
    def arm(self, callback: Callable[[], None]) -> TickHandle: ...
