from pomodoro_clock.core.clock import UNTITLED_TASK, StorageClock
from pomodoro_clock.data.storage import CLOCK_CANCELLED, CLOCK_DONE


def test_begin_and_end_tracking_uses_current_task(storage) -> None:
    storage.create_task("Write report")
    clock = StorageClock(storage)

    clock.begin_tracking()
    clock.end_tracking()

    entries = storage.list_clock_entries()
    assert len(entries) == 1
    assert entries[0].task_title == "Write report"
    assert entries[0].status == CLOCK_DONE


def test_cancel_tracking_without_task(storage) -> None:
    clock = StorageClock(storage)

    clock.begin_tracking()
    clock.cancel_tracking()

    entry = storage.list_clock_entries()[0]
    assert entry.task_title == UNTITLED_TASK
    assert entry.status == CLOCK_CANCELLED


def test_begin_tracking_closes_stale_entry(storage) -> None:
    clock = StorageClock(storage)
    clock.begin_tracking()
    clock.begin_tracking()

    statuses = [entry.status for entry in storage.list_clock_entries()]
    assert statuses == ["running", CLOCK_CANCELLED]


def test_closing_without_running_entry_is_noop(storage) -> None:
    clock = StorageClock(storage)

    clock.end_tracking()
    clock.cancel_tracking()

    assert storage.list_clock_entries() == []
