import pytest

from pomodoro_clock.core.phase import Phase
from pomodoro_clock.core.settings import SETTINGS_KEY, TimerSettings, load_settings, save_settings


def test_defaults() -> None:
    settings = TimerSettings()

    assert settings.duration_seconds(Phase.WORK) == 1500
    assert settings.duration_seconds(Phase.SHORT_BREAK) == 300
    assert settings.duration_seconds(Phase.LONG_BREAK) == 1200
    assert settings.long_break_frequency == 4
    assert settings.play_sounds is True
    assert settings.finished_sound(Phase.WORK) is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"work_minutes": 0},
        {"short_break_minutes": -5},
        {"long_break_minutes": 2.5},
        {"long_break_frequency": 0},
        {"work_minutes": True},
        {"work_format": "Pomodoro {remaining}"},
        {"long_break_format": "Long {0}"},
        {"work_format": "Pomodoro"},
        {"short_break_format": "{time} / {time}"},
        {"work_format": 25},
    ],
)
def test_invalid_values_fail_fast(overrides) -> None:
    with pytest.raises(ValueError):
        TimerSettings(**overrides)


def test_idle_has_no_duration() -> None:
    with pytest.raises(ValueError):
        TimerSettings().duration_seconds(Phase.IDLE)


def test_load_settings_merges_stored_overrides(storage) -> None:
    storage.set_setting(SETTINGS_KEY, {"work_minutes": 50, "play_sounds": False, "unknown": 1})

    settings = load_settings(storage)

    assert settings.work_minutes == 50
    assert settings.play_sounds is False
    assert settings.short_break_minutes == 5


def test_load_settings_rejects_bad_stored_values(storage) -> None:
    storage.set_setting(SETTINGS_KEY, {"short_break_minutes": 0})

    with pytest.raises(ValueError):
        load_settings(storage)


def test_load_settings_ignores_malformed_payload(storage) -> None:
    storage.set_setting(SETTINGS_KEY, ["not", "a", "mapping"])

    assert load_settings(storage) == TimerSettings()


def test_save_and_load_round_trip(storage) -> None:
    settings = TimerSettings(long_break_frequency=2, work_finished_sound="/tmp/bell.wav")

    save_settings(storage, settings)

    assert load_settings(storage) == settings


def test_template_may_format_the_time_field() -> None:
    settings = TimerSettings(work_format="🍅 {time:>6}")

    assert settings.status_format(Phase.WORK) == "🍅 {time:>6}"
