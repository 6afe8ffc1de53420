from __future__ import annotations

"""SQLite storage for settings, tasks and clocked work intervals."""

import json
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator


SCHEMA_VERSION = 1
MAX_TASKS = 10

CLOCK_RUNNING = "running"
CLOCK_DONE = "done"
CLOCK_CANCELLED = "cancelled"


@dataclass(frozen=True)
class TaskRow:
    id: int
    title: str
    is_done: bool
    sort_order: int
    created_at: str


@dataclass(frozen=True)
class ClockEntryRow:
    id: int
    task_title: str
    started_at: str
    ended_at: str | None
    status: str

    @property
    def duration_sec(self) -> int | None:
        if self.ended_at is None:
            return None
        delta = datetime.fromisoformat(self.ended_at) - datetime.fromisoformat(self.started_at)
        return max(0, int(delta.total_seconds()))


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class Storage:
    """Wraps the SQLite connection and transactional operations."""
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def _read(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        """Creates all tables on first run."""
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    is_done INTEGER NOT NULL DEFAULT 0,
                    sort_order INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS clock_entries(
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    task_title TEXT NOT NULL,
                    started_at TEXT NOT NULL,
                    ended_at TEXT,
                    status TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )

    def get_setting(self, key: str, default: Any = None) -> Any:
        with self._read() as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        if not row:
            return default
        raw = row["value"]
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return raw

    def set_setting(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO settings(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (key, payload),
            )

    def list_tasks(self, limit: int = 100, include_done: bool = True) -> list[TaskRow]:
        """Returns tasks in manual sort order."""
        query = "SELECT id, title, is_done, sort_order, created_at FROM tasks"
        if not include_done:
            query += " WHERE is_done = 0"
        query += " ORDER BY sort_order ASC, id ASC LIMIT ?"
        with self._read() as conn:
            rows = conn.execute(query, (limit,)).fetchall()
        return [
            TaskRow(
                id=row["id"],
                title=row["title"],
                is_done=bool(row["is_done"]),
                sort_order=row["sort_order"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def current_task(self) -> TaskRow | None:
        tasks = self.list_tasks(limit=1, include_done=False)
        return tasks[0] if tasks else None

    def create_task(self, title: str) -> int:
        clean_title = " ".join(title.split())
        if not clean_title:
            raise ValueError("Task title cannot be empty")
        with self._transaction() as conn:
            count = conn.execute("SELECT COUNT(*) AS cnt FROM tasks WHERE is_done = 0").fetchone()["cnt"]
            if count >= MAX_TASKS:
                raise ValueError("Task limit reached")
            next_order_row = conn.execute("SELECT COALESCE(MAX(sort_order), -1) + 1 AS next_order FROM tasks").fetchone()
            cursor = conn.execute(
                "INSERT INTO tasks(title, is_done, sort_order, created_at) VALUES (?, 0, ?, ?)",
                (clean_title, int(next_order_row["next_order"]), _now()),
            )
            return int(cursor.lastrowid)

    def delete_task(self, task_id: int) -> None:
        with self._transaction() as conn:
            conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))

    def set_task_done(self, task_id: int, is_done: bool) -> None:
        with self._transaction() as conn:
            conn.execute("UPDATE tasks SET is_done = ? WHERE id = ?", (int(is_done), task_id))

    def reorder_tasks(self, task_ids_in_order: list[int]) -> None:
        with self._transaction() as conn:
            for sort_order, task_id in enumerate(task_ids_in_order):
                conn.execute("UPDATE tasks SET sort_order = ? WHERE id = ?", (sort_order, task_id))

    def open_clock_entry(self, task_title: str, started_at: str | None = None) -> int:
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO clock_entries(task_title, started_at, ended_at, status) VALUES (?, ?, NULL, ?)",
                (task_title, started_at or _now(), CLOCK_RUNNING),
            )
            return int(cursor.lastrowid)

    def close_clock_entry(self, entry_id: int, status: str, ended_at: str | None = None) -> None:
        if status not in {CLOCK_DONE, CLOCK_CANCELLED}:
            raise ValueError(f"Unsupported clock status {status!r}")
        with self._transaction() as conn:
            conn.execute(
                "UPDATE clock_entries SET ended_at = ?, status = ? WHERE id = ? AND status = ?",
                (ended_at or _now(), status, entry_id, CLOCK_RUNNING),
            )

    def running_clock_entry(self) -> ClockEntryRow | None:
        with self._read() as conn:
            row = conn.execute(
                "SELECT id, task_title, started_at, ended_at, status FROM clock_entries WHERE status = ? ORDER BY id DESC LIMIT 1",
                (CLOCK_RUNNING,),
            ).fetchone()
        return self._clock_row(row) if row else None

    def list_clock_entries(self, limit: int = 100) -> list[ClockEntryRow]:
        """Returns the latest clock entries, newest first."""
        with self._read() as conn:
            rows = conn.execute(
                "SELECT id, task_title, started_at, ended_at, status FROM clock_entries ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._clock_row(row) for row in rows]

    def _clock_row(self, row: sqlite3.Row) -> ClockEntryRow:
        return ClockEntryRow(
            id=row["id"],
            task_title=row["task_title"],
            started_at=row["started_at"],
            ended_at=row["ended_at"],
            status=row["status"],
        )
