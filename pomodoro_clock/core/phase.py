from __future__ import annotations

from enum import Enum


class Phase(str, Enum):
    IDLE = "idle"
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


RUNNING_PHASES = frozenset({Phase.WORK, Phase.SHORT_BREAK, Phase.LONG_BREAK})
