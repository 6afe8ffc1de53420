from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pytest

from pomodoro_clock.core.settings import TimerSettings
from pomodoro_clock.core.timer import PomodoroTimer
from pomodoro_clock.data.storage import Storage


class ManualTickHandle:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        self.active = False


class ManualTicker:
    """Ticker that only fires when a test asks it to."""

    def __init__(self) -> None:
        self.handles: list[ManualTickHandle] = []

    def arm(self, callback: Callable[[], None]) -> ManualTickHandle:
        handle = ManualTickHandle(callback)
        self.handles.append(handle)
        return handle

    @property
    def active_handles(self) -> list[ManualTickHandle]:
        return [handle for handle in self.handles if handle.active]

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            for handle in self.active_handles:
                if handle.active:
                    handle.callback()


@dataclass
class Recorder:
    clock_calls: list[str] = field(default_factory=list)
    notifications: list[tuple[str, str]] = field(default_factory=list)
    sounds: list[str | None] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)

    def begin_tracking(self) -> None:
        self.clock_calls.append("begin")

    def end_tracking(self) -> None:
        self.clock_calls.append("end")

    def cancel_tracking(self) -> None:
        self.clock_calls.append("cancel")

    def notify(self, title: str, body: str) -> None:
        self.notifications.append((title, body))

    def play_sound(self, path: str | None) -> None:
        self.sounds.append(path)

    def publish_status(self, text: str) -> None:
        self.statuses.append(text)


@dataclass
class Harness:
    timer: PomodoroTimer
    ticker: ManualTicker
    recorder: Recorder


@pytest.fixture
def make_harness() -> Callable[..., Harness]:
    def _make(**settings_overrides) -> Harness:
        ticker = ManualTicker()
        recorder = Recorder()
        timer = PomodoroTimer(
            TimerSettings(**settings_overrides),
            ticker,
            clock=recorder,
            notifier=recorder,
            sound_player=recorder,
            status_sink=recorder,
        )
        return Harness(timer=timer, ticker=ticker, recorder=recorder)

    return _make


@pytest.fixture
def storage(tmp_path) -> Storage:
    storage = Storage(tmp_path / "pomodoro.db")
    storage.init_db()
    return storage
