import pytest

from pomodoro_clock.data.storage import CLOCK_CANCELLED, CLOCK_DONE, CLOCK_RUNNING, MAX_TASKS, Storage


def test_init_db_creates_file(tmp_path) -> None:
    db = tmp_path / "nested" / "pomodoro.db"
    storage = Storage(db)
    storage.init_db()
    storage.init_db()
    assert db.exists()


def test_set_get_setting(storage) -> None:
    storage.set_setting("volume", 0)
    assert storage.get_setting("volume") == 0
    assert storage.get_setting("missing", "x") == "x"


def test_create_task_normalizes_and_validates(storage) -> None:
    task_id = storage.create_task("  Write   report ")

    assert storage.list_tasks()[0].title == "Write report"
    assert storage.current_task().id == task_id
    with pytest.raises(ValueError):
        storage.create_task("   ")


def test_open_task_limit(storage) -> None:
    ids = [storage.create_task(f"Task {i}") for i in range(MAX_TASKS)]

    with pytest.raises(ValueError):
        storage.create_task("Task overflow")

    storage.set_task_done(ids[0], True)
    storage.create_task("Task after done")
    assert len(storage.list_tasks()) == MAX_TASKS + 1


def test_reorder_and_current_task(storage) -> None:
    ids = [storage.create_task(f"Task {i}") for i in range(3)]

    storage.reorder_tasks([ids[2], ids[0], ids[1]])
    storage.set_task_done(ids[2], True)

    assert [row.id for row in storage.list_tasks()] == [ids[2], ids[0], ids[1]]
    assert storage.current_task().id == ids[0]

    storage.delete_task(ids[0])
    assert storage.current_task().id == ids[1]


def test_clock_entries_lifecycle(storage) -> None:
    entry_id = storage.open_clock_entry("Write report", started_at="2026-01-01T10:00:00")
    assert storage.running_clock_entry().id == entry_id

    storage.close_clock_entry(entry_id, CLOCK_DONE, ended_at="2026-01-01T10:25:00")
    storage.close_clock_entry(entry_id, CLOCK_CANCELLED)

    entry = storage.list_clock_entries()[0]
    assert storage.running_clock_entry() is None
    assert entry.status == CLOCK_DONE
    assert entry.duration_sec == 1500


def test_close_clock_entry_rejects_running_status(storage) -> None:
    entry_id = storage.open_clock_entry("Task")

    with pytest.raises(ValueError):
        storage.close_clock_entry(entry_id, CLOCK_RUNNING)
