# tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Every public method is a single round trip on its own connection.
    Methods that target one id return None when no row matched; that is a
    normal outcome, not an error. Storage faults (sqlite3.Error) propagate.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'pending',
                    created_at REAL NOT NULL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("title", "TEXT NOT NULL DEFAULT ''")
            add_col("status", "TEXT NOT NULL DEFAULT 'pending'")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")

            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            status=TaskStatus.from_db(row["status"]),
            created_at=float(row["created_at"] or 0.0),
        )

    def _fetch_one(self, conn: sqlite3.Connection, task_id: int) -> Task | None:
        cur = conn.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
        row = cur.fetchone()
        return self._row_to_task(row) if row else None

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def list_tasks(self) -> list[Task]:
        """All tasks, newest first. Equal timestamps fall back to insertion order."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY created_at DESC, id DESC")
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def add_task(self, title: str, status: TaskStatus = TaskStatus.PENDING) -> Task:
        status = TaskStatus.parse(status)
        now = time.time()

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO tasks(title, status, created_at) VALUES (?, ?, ?)",
                (title, status.value, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            logger.debug("Task added id=%s status=%s", rowid, status.value)
            return Task(id=int(rowid), title=title, status=status, created_at=now)
        finally:
            conn.close()

    def get_task(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            return self._fetch_one(conn, task_id)
        finally:
            conn.close()

    def update_task(
        self,
        task_id: int,
        title: str,
        status: TaskStatus | None = None,
    ) -> Task | None:
        """
        Update title, and status only when one is given.

        status=None means "leave status as stored".
        """
        fields = ["title = ?"]
        params: list[object] = [title]

        if status is not None:
            fields.append("status = ?")
            params.append(TaskStatus.parse(status).value)

        params.append(int(task_id))
        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"

        conn = self._get_conn()
        try:
            cur = conn.execute(sql, params)
            conn.commit()
            if cur.rowcount == 0:
                logger.debug("update_task: no row for id=%s", task_id)
                return None
            return self._fetch_one(conn, task_id)
        finally:
            conn.close()

    def update_task_status(self, task_id: int, status: TaskStatus) -> Task | None:
        status = TaskStatus.parse(status)
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE tasks SET status = ? WHERE id = ?",
                (status.value, int(task_id)),
            )
            conn.commit()
            if cur.rowcount == 0:
                logger.debug("update_task_status: no row for id=%s", task_id)
                return None
            return self._fetch_one(conn, task_id)
        finally:
            conn.close()

    def delete_task(self, task_id: int) -> Task | None:
        """Delete one task; returns the removed row (None if nothing matched)."""
        conn = self._get_conn()
        try:
            existing = self._fetch_one(conn, task_id)
            if existing is None:
                logger.debug("delete_task: no row for id=%s", task_id)
                return None
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            conn.commit()
            if cur.rowcount == 0:
                # Another caller removed the row after our read.
                logger.debug("delete_task: row id=%s vanished before delete", task_id)
                return None
            logger.debug("Task deleted id=%s", task_id)
            return existing
        finally:
            conn.close()
