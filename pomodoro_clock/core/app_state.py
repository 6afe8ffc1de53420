from __future__ import annotations

from dataclasses import replace
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal

from pomodoro_clock.core.settings import TimerSettings, load_settings, save_settings
from pomodoro_clock.data.storage import ClockEntryRow, Storage, TaskRow


class AppState(QObject):
    state_changed = pyqtSignal()
    settings_changed = pyqtSignal(object)
    tasks_changed = pyqtSignal()
    history_changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.settings = TimerSettings()
        self._storage: Storage | None = None
        self.tasks: list[TaskRow] = []
        self.history: list[ClockEntryRow] = []

    def load_from_storage(self, storage: Storage) -> None:
        self._storage = storage
        self.settings = load_settings(storage)
        self.tasks = storage.list_tasks(include_done=True)
        self.history = storage.list_clock_entries()
        self.settings_changed.emit(self.settings)
        self.tasks_changed.emit()
        self.history_changed.emit()
        self.state_changed.emit()

    def update_settings(self, **changes: Any) -> TimerSettings:
        """Validates and persists changed settings; raises ValueError on bad values."""
        updated = replace(self.settings, **changes)
        self.settings = updated
        if self._storage:
            save_settings(self._storage, updated)
        self.settings_changed.emit(updated)
        self.state_changed.emit()
        return updated

    def refresh_history(self) -> None:
        if not self._storage:
            return
        self.history = self._storage.list_clock_entries()
        self.history_changed.emit()

    def current_task(self) -> TaskRow | None:
        return next((task for task in self.tasks if not task.is_done), None)

    def add_task(self, title: str) -> bool:
        if not self._storage:
            return False
        try:
            self._storage.create_task(title)
        except ValueError:
            return False
        self._reload_tasks()
        return True

    def remove_task(self, task_id: int) -> None:
        if not self._storage:
            return
        self._storage.delete_task(task_id)
        self._reload_tasks()

    def toggle_task_done(self, task_id: int, done: bool) -> None:
        if not self._storage:
            return
        self._storage.set_task_done(task_id, done)
        self._reload_tasks()

    def move_task_up(self, task_id: int) -> None:
        self._move_task(task_id, -1)

    def move_task_down(self, task_id: int) -> None:
        self._move_task(task_id, 1)

    def _reload_tasks(self) -> None:
        if not self._storage:
            return
        self.tasks = self._storage.list_tasks(include_done=True)
        self.tasks_changed.emit()
        self.state_changed.emit()

    def _move_task(self, task_id: int, direction: int) -> None:
        if not self._storage:
            return
        ids = [task.id for task in self.tasks]
        if task_id not in ids:
            return
        idx = ids.index(task_id)
        new_idx = idx + direction
        if new_idx < 0 or new_idx >= len(ids):
            return
        ids[idx], ids[new_idx] = ids[new_idx], ids[idx]
        self._storage.reorder_tasks(ids)
        self._reload_tasks()
