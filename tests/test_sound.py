import pytest

pytest.importorskip("PyQt6.QtMultimedia")

from pomodoro_clock.ui.sound import QtSoundPlayer  # noqa: E402


def test_missing_or_absent_sound_is_skipped(tmp_path, caplog) -> None:
    player = QtSoundPlayer()

    player.play_sound(None)
    player.play_sound(str(tmp_path / "bell.wav"))

    assert "Sound file not found" in caplog.text
