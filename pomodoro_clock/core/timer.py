from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pomodoro_clock.core.contracts import ClockControl, Notifier, SoundPlayer, StatusSink, TickHandle, Ticker
from pomodoro_clock.core.hooks import TimerHooks
from pomodoro_clock.core.phase import RUNNING_PHASES, Phase
from pomodoro_clock.core.settings import TimerSettings
from pomodoro_clock.core.status import format_status


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimerSnapshot:
    phase: Phase
    remaining_seconds: int
    completed_work_count: int
    status_text: str

    @property
    def is_running(self) -> bool:
        return self.phase in RUNNING_PHASES


class PomodoroTimer:
    """Pomodoro phase machine driven by a one-second ticker, detached from UI framework.

    All operations must be called from the ticker's scheduling context (the Qt
    event loop in the desktop app), so no locking is done here.
    """

    def __init__(
        self,
        settings: TimerSettings,
        ticker: Ticker,
        *,
        clock: ClockControl,
        notifier: Notifier,
        sound_player: SoundPlayer,
        status_sink: StatusSink,
        hooks: TimerHooks | None = None,
    ) -> None:
        self._settings = settings
        self._ticker = ticker
        self._clock = clock
        self._notifier = notifier
        self._sound_player = sound_player
        self._status_sink = status_sink
        self.hooks = hooks or TimerHooks()

        self._phase = Phase.IDLE
        self._remaining_seconds = 0
        self._completed_work_count = 0
        self._tick_handle: TickHandle | None = None

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def completed_work_count(self) -> int:
        return self._completed_work_count

    @property
    def is_running(self) -> bool:
        return self._phase in RUNNING_PHASES

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    def configure(self, settings: TimerSettings) -> None:
        """Applies new settings; a running phase keeps its current countdown."""
        self._settings = settings

    def status_text(self) -> str:
        return format_status(self._phase, self._remaining_seconds, self._settings)

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self._phase,
            remaining_seconds=self._remaining_seconds,
            completed_work_count=self._completed_work_count,
            status_text=self.status_text(),
        )

    def start(self, phase: Phase | None = None) -> None:
        """Enters ``phase`` (work by default) with a fresh countdown and ticker."""
        phase = phase or Phase.WORK
        if phase not in RUNNING_PHASES:
            raise ValueError(f"Cannot start phase {phase}")
        self._cancel_ticker()
        if phase == Phase.LONG_BREAK:
            self._completed_work_count = 0

        self._phase = phase
        self._remaining_seconds = self._settings.duration_seconds(phase)
        self._tick_handle = self._ticker.arm(self.tick)
        logger.info("Started %s: %ss", phase.value, self._remaining_seconds)
        self._publish_status()
        if phase == Phase.WORK:
            self.hooks.run("started")

    def tick(self) -> None:
        if self._phase == Phase.IDLE:
            # Stray tick that raced a cancellation.
            self.reset()
            return

        self._remaining_seconds -= 1
        if self._remaining_seconds < 1:
            self._remaining_seconds = 0
            self._on_phase_finished(self._phase)
        self._publish_status()

    def kill(self) -> None:
        """Manually interrupts the current phase; safe to call while idle."""
        was = self._phase
        self.reset()
        logger.info("Killed %s", was.value)
        self._on_killed()

    def reset(self) -> None:
        self._cancel_ticker()
        self._phase = Phase.IDLE
        self._remaining_seconds = 0
        self._publish_status()

    def toggle(self, confirm: Callable[[], bool]) -> bool:
        """Starts a work phase when idle, otherwise kills it if ``confirm()`` agrees.

        Returns True when the timer state changed.
        """
        if self._phase == Phase.IDLE:
            self._call_safely("begin tracking", self._clock.begin_tracking)
            self.start(Phase.WORK)
            return True
        if not confirm():
            return False
        self.kill()
        return True

    def _on_phase_finished(self, phase: Phase) -> None:
        if phase == Phase.WORK:
            self._on_work_finished()
        elif phase == Phase.SHORT_BREAK:
            self._on_break_finished(phase, "Short break finished.")
        elif phase == Phase.LONG_BREAK:
            self._on_break_finished(phase, "Long break finished.")

    def _on_work_finished(self) -> None:
        self._call_safely("end tracking", self._clock.end_tracking)
        self._play_sound(Phase.WORK)
        self._completed_work_count += 1
        logger.info("Work interval finished: count=%s", self._completed_work_count)
        if self._completed_work_count > self._settings.long_break_frequency:
            self._notify("Pomodoro completed!", "Time for a long break.")
            self.start(Phase.LONG_BREAK)
        else:
            self._notify("Pomodoro completed!", "Time for a short break.")
            self.start(Phase.SHORT_BREAK)
        self.hooks.run("work_finished")
        self._publish_status()

    def _on_break_finished(self, phase: Phase, title: str) -> None:
        self._notify(title, "Ready for another pomodoro.")
        self._play_sound(phase)
        logger.info("%s finished", phase.value)
        self.reset()
        self.hooks.run("break_finished")

    def _on_killed(self) -> None:
        self._notify("Pomodoro killed.", "One does not simply kill a pomodoro!")
        self._call_safely("cancel tracking", self._clock.cancel_tracking)
        self.reset()
        self.hooks.run("killed")
        self._publish_status()

    def _cancel_ticker(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _publish_status(self) -> None:
        self._call_safely("publish status", self._status_sink.publish_status, self.status_text())

    def _notify(self, title: str, body: str) -> None:
        self._call_safely("notify", self._notifier.notify, title, body)

    def _play_sound(self, phase: Phase) -> None:
        if not self._settings.play_sounds:
            return
        self._call_safely("play sound", self._sound_player.play_sound, self._settings.finished_sound(phase))

    def _call_safely(self, what: str, func: Callable[..., None], *args: object) -> None:
        try:
            func(*args)
        except Exception:
            logger.exception("Failed to %s", what)
