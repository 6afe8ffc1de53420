from __future__ import annotations

"""Process-wide timer settings with defaults and load-time validation."""

import logging
import string
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from pomodoro_clock.core.phase import Phase
from pomodoro_clock.data.storage import Storage


logger = logging.getLogger(__name__)

SETTINGS_KEY = "timer"


@dataclass(frozen=True)
class TimerSettings:
    work_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 20
    long_break_frequency: int = 4
    work_format: str = "Pomodoro~{time}"
    short_break_format: str = "Short Break~{time}"
    long_break_format: str = "Long Break~{time}"
    work_finished_sound: str | None = None
    short_break_finished_sound: str | None = None
    long_break_finished_sound: str | None = None
    play_sounds: bool = True

    def __post_init__(self) -> None:
        for name in ("work_minutes", "short_break_minutes", "long_break_minutes", "long_break_frequency"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        for name in ("work_format", "short_break_format", "long_break_format"):
            if _template_fields(getattr(self, name)) != ["time"]:
                raise ValueError(f"{name} must be a template with a single {{time}} field")

    def duration_seconds(self, phase: Phase) -> int:
        minutes = {
            Phase.WORK: self.work_minutes,
            Phase.SHORT_BREAK: self.short_break_minutes,
            Phase.LONG_BREAK: self.long_break_minutes,
        }
        if phase not in minutes:
            raise ValueError(f"{phase} has no duration")
        return minutes[phase] * 60

    def status_format(self, phase: Phase) -> str:
        templates = {
            Phase.WORK: self.work_format,
            Phase.SHORT_BREAK: self.short_break_format,
            Phase.LONG_BREAK: self.long_break_format,
        }
        return templates.get(phase, "")

    def finished_sound(self, phase: Phase) -> str | None:
        sounds = {
            Phase.WORK: self.work_finished_sound,
            Phase.SHORT_BREAK: self.short_break_finished_sound,
            Phase.LONG_BREAK: self.long_break_finished_sound,
        }
        return sounds.get(phase)


def _template_fields(template: object) -> list[str] | None:
    if not isinstance(template, str):
        return None
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError:
        return None
    return [field for _, field, _, _ in parsed if field is not None]


def load_settings(storage: Storage) -> TimerSettings:
    """Reads stored overrides on top of the defaults; invalid values raise ValueError."""
    raw = storage.get_setting(SETTINGS_KEY, {})
    if not isinstance(raw, dict):
        logger.warning("Ignoring malformed timer settings: %r", raw)
        return TimerSettings()

    known = {field.name for field in fields(TimerSettings)}
    overrides: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown timer setting %r", key)
            continue
        overrides[key] = value
    return replace(TimerSettings(), **overrides)


def save_settings(storage: Storage, settings: TimerSettings) -> None:
    storage.set_setting(SETTINGS_KEY, asdict(settings))
