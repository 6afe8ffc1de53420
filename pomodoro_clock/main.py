from __future__ import annotations

"""Entry point for Pomodoro Clock.

Sets up logging, storage, settings and the timer collaborators, then runs the
Qt event loop that drives every timer tick.
"""

import logging
import os
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QSystemTrayIcon

from pomodoro_clock.core.app_state import AppState
from pomodoro_clock.core.clock import StorageClock
from pomodoro_clock.core.ticker import QtTicker
from pomodoro_clock.core.timer import PomodoroTimer
from pomodoro_clock.data.storage import Storage
from pomodoro_clock.ui.main_window import MainWindow
from pomodoro_clock.ui.styles import apply_theme
from pomodoro_clock.ui.sound import QtSoundPlayer
from pomodoro_clock.ui.tray import TrayNotifier, TrayStatusSink, make_tray_icon


LOG_LEVEL_ENV = "POMODORO_CLOCK_LOG_LEVEL"
DB_PATH_ENV = "POMODORO_CLOCK_DB"


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def default_db_path() -> Path:
    """Returns the SQLite file path, overridable through the environment."""
    override = os.environ.get(DB_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".pomodoro_clock" / "pomodoro.db"


def main() -> int:
    """Builds the application dependencies and runs the UI loop."""
    configure_logging()
    logger = logging.getLogger("pomodoro_clock")

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(True)
    apply_theme(app)

    storage = Storage(default_db_path())
    storage.init_db()

    app_state = AppState()
    app_state.load_from_storage(storage)

    tray: QSystemTrayIcon | None = None
    if QSystemTrayIcon.isSystemTrayAvailable():
        tray = QSystemTrayIcon(make_tray_icon(), app)
    else:
        logger.info("System tray unavailable; notifications go to the log")

    status_sink = TrayStatusSink(tray)
    timer = PomodoroTimer(
        app_state.settings,
        QtTicker(parent=app),
        clock=StorageClock(storage),
        notifier=TrayNotifier(tray),
        sound_player=QtSoundPlayer(),
        status_sink=status_sink,
    )

    window = MainWindow(timer=timer, app_state=app_state, status_sink=status_sink)
    window.show()
    logger.info("Pomodoro Clock ready: db=%s", storage.db_path)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
