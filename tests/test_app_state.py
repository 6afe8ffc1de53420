import pytest

from pomodoro_clock.core.app_state import AppState
from pomodoro_clock.core.settings import load_settings


def test_load_and_update_settings_persist(storage) -> None:
    state = AppState()
    state.load_from_storage(storage)
    seen = []
    state.settings_changed.connect(seen.append)

    state.update_settings(work_minutes=45, long_break_frequency=3)

    assert load_settings(storage).work_minutes == 45
    assert seen == [state.settings]

    again = AppState()
    again.load_from_storage(storage)
    assert again.settings.long_break_frequency == 3


def test_update_settings_rejects_invalid_values(storage) -> None:
    state = AppState()
    state.load_from_storage(storage)

    with pytest.raises(ValueError):
        state.update_settings(short_break_minutes=0)

    assert state.settings.short_break_minutes == 5
    assert load_settings(storage).short_break_minutes == 5


def test_task_methods_and_current_task(storage) -> None:
    state = AppState()
    state.load_from_storage(storage)

    assert state.add_task("Task A") is True
    assert state.add_task("Task B") is True
    assert state.add_task("  ") is False
    first_id = state.tasks[0].id
    second_id = state.tasks[1].id

    state.move_task_up(second_id)
    assert [t.id for t in state.tasks] == [second_id, first_id]

    state.toggle_task_done(second_id, True)
    assert state.current_task().id == first_id

    state.remove_task(first_id)
    assert state.current_task() is None


def test_refresh_history_reads_clock_entries(storage) -> None:
    state = AppState()
    state.load_from_storage(storage)
    storage.open_clock_entry("Task A")

    state.refresh_history()

    assert [row.task_title for row in state.history] == ["Task A"]


def test_without_storage_task_calls_are_ignored() -> None:
    state = AppState()

    assert state.add_task("Task") is False
    state.remove_task(1)
    state.toggle_task_done(1, True)
    state.move_task_up(1)
    state.refresh_history()
    assert state.tasks == []


def test_reordering_changes_task_to_clock_into(storage) -> None:
    state = AppState()
    state.load_from_storage(storage)
    state.add_task("Task A")
    state.add_task("Task B")
    second_id = state.tasks[1].id
    changes = []
    state.state_changed.connect(lambda: changes.append(state.current_task().title))

    state.move_task_up(second_id)
    state.move_task_up(second_id)
    state.move_task_down(second_id)

    assert changes == ["Task B", "Task A"]
    assert storage.current_task().title == "Task A"
