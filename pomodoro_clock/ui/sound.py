from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QUrl
from PyQt6.QtMultimedia import QSoundEffect


logger = logging.getLogger(__name__)


class QtSoundPlayer:
    """Plays WAV files through QSoundEffect; absent or missing files are skipped."""

    def __init__(self, volume: float = 1.0) -> None:
        self._volume = max(0.0, min(1.0, volume))
        self._effects: dict[str, QSoundEffect] = {}

    def play_sound(self, path: str | None) -> None:
        if not path:
            return
        sound_path = Path(path).expanduser()
        if not sound_path.is_file():
            logger.warning("Sound file not found: %s", sound_path)
            return

        key = str(sound_path.resolve())
        effect = self._effects.get(key)
        if effect is None:
            effect = QSoundEffect()
            effect.setSource(QUrl.fromLocalFile(key))
            effect.setVolume(self._volume)
            self._effects[key] = effect
        effect.play()
