from __future__ import annotations

import logging

from pomodoro_clock.data.storage import CLOCK_CANCELLED, CLOCK_DONE, Storage


logger = logging.getLogger(__name__)

UNTITLED_TASK = "Untitled"


class StorageClock:
    """Clocks work intervals against the first open task in storage."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage

    def begin_tracking(self) -> None:
        running = self._storage.running_clock_entry()
        if running is not None:
            logger.info("Closing stale clock entry %s for %r", running.id, running.task_title)
            self._storage.close_clock_entry(running.id, CLOCK_CANCELLED)
        task = self._storage.current_task()
        title = task.title if task else UNTITLED_TASK
        entry_id = self._storage.open_clock_entry(title)
        logger.info("Clocked in: entry=%s task=%r", entry_id, title)

    def end_tracking(self) -> None:
        self._close(CLOCK_DONE)

    def cancel_tracking(self) -> None:
        self._close(CLOCK_CANCELLED)

    def _close(self, status: str) -> None:
        running = self._storage.running_clock_entry()
        if running is None:
            logger.info("No running clock entry to mark %s", status)
            return
        self._storage.close_clock_entry(running.id, status)
        logger.info("Clocked out: entry=%s status=%s", running.id, status)
