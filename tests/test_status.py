import pytest

from pomodoro_clock.core.phase import Phase
from pomodoro_clock.core.settings import TimerSettings
from pomodoro_clock.core.status import format_remaining, format_status


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00"), (59, "00:59"), (60, "01:00"), (1500, "25:00"), (6000, "100:00"), (-3, "00:00")],
)
def test_format_remaining(seconds, expected) -> None:
    assert format_remaining(seconds) == expected


def test_idle_status_is_empty() -> None:
    assert format_status(Phase.IDLE, 42, TimerSettings()) == ""


def test_phase_templates() -> None:
    settings = TimerSettings(short_break_format="☕ {time}")

    assert format_status(Phase.WORK, 1499, settings) == "Pomodoro~24:59"
    assert format_status(Phase.SHORT_BREAK, 61, settings) == "☕ 01:01"
    assert format_status(Phase.LONG_BREAK, 1200, settings) == "Long Break~20:00"
