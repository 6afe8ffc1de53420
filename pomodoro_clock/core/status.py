from __future__ import annotations

from pomodoro_clock.core.phase import Phase
from pomodoro_clock.core.settings import TimerSettings


def format_remaining(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_status(phase: Phase, remaining_seconds: int, settings: TimerSettings) -> str:
    """Status line text for the given phase; empty while idle."""
    if phase == Phase.IDLE:
        return ""
    return settings.status_format(phase).format(time=format_remaining(remaining_seconds))
