# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any

from ..core.errors import ConflictError, StorageError
from .task_models import ReminderWindow, Task, User

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; ids outside it cannot exist.
_ROWID_MIN = -(2**63)
_ROWID_MAX = 2**63 - 1


def _is_rowid(value: int) -> bool:
    return _ROWID_MIN <= int(value) <= _ROWID_MAX


class TaskStore:
    """
    SQLite store for users (`logindata`) and tasks (`post`).

    The schema is intentionally simple and migration-safe:
    - create tables if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection, so the reminder tick can run
      in a worker thread while HTTP handlers use the same store.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s tasks=%s", self._db_path, total)

    def close(self) -> None:
        """Shutdown hook (no persistent connections to close)."""
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
                CREATE TABLE IF NOT EXISTS logindata (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT NOT NULL,
                    password TEXT NOT NULL,
                    firstname TEXT NOT NULL,
                    lastname TEXT NOT NULL
                )
                """
            )
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS post (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL,
                    task TEXT NOT NULL,
                    type TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    timeofentry TEXT,
                    remindertime TEXT NOT NULL,
                    remind_at REAL,
                    completestatus INTEGER NOT NULL DEFAULT 0,
                    currentstatus INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(post)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE post ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column post.%s", name)

            # Databases created before reminder instants were stored lack these.
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("timeofentry", "TEXT")
            add_col("remind_at", "REAL")

            cur.execute("CREATE UNIQUE INDEX IF NOT EXISTS idx_logindata_email ON logindata(email)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_post_user_flags ON post(user_id, completestatus, currentstatus)")
            cur.execute("CREATE INDEX IF NOT EXISTS idx_post_due ON post(completestatus, remind_at)")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=int(row["id"]),
            email=str(row["email"]),
            firstname=str(row["firstname"] or ""),
            lastname=str(row["lastname"] or ""),
        )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            user_id=int(row["user_id"]),
            task=str(row["task"] or ""),
            type=str(row["type"] or ""),
            created_at=float(row["created_at"] or 0.0),
            timeofentry=row["timeofentry"],
            remindertime=str(row["remindertime"] or ""),
            remind_at=float(row["remind_at"]) if row["remind_at"] is not None else None,
            completestatus=bool(row["completestatus"]),
            currentstatus=bool(row["currentstatus"]),
        )

    # ---- users ----

    def add_user(self, *, email: str, password_hash: str, firstname: str, lastname: str) -> User:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            try:
                cur.execute(
                    "INSERT INTO logindata(email, password, firstname, lastname) VALUES (?, ?, ?, ?)",
                    (email, password_hash, firstname, lastname),
                )
            except sqlite3.IntegrityError as exc:
                # Lost the race against a concurrent registration with the same email.
                raise ConflictError("Email already registered") from exc
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for logindata insert")
            logger.debug("User added id=%s email=%s", rowid, email)
            return User(id=int(rowid), email=email, firstname=firstname, lastname=lastname)
        finally:
            conn.close()

    def get_user_by_email(self, email: str) -> User | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM logindata WHERE email = ?", (email,))
            row = cur.fetchone()
            return self._row_to_user(row) if row else None
        finally:
            conn.close()

    def get_password_hash(self, user_id: int) -> str | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT password FROM logindata WHERE id = ?", (int(user_id),))
            row = cur.fetchone()
            return str(row["password"]) if row else None
        finally:
            conn.close()

    def resolve_owner(self, user_id: int) -> User | None:
        """Contact record (email, names) of a task owner, or None if missing."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "SELECT id, email, firstname, lastname FROM logindata WHERE id = ?",
                (int(user_id),),
            )
            row = cur.fetchone()
            return self._row_to_user(row) if row else None
        finally:
            conn.close()

    def count_users(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM logindata")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    # ---- tasks ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM post")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(
        self,
        *,
        user_id: int,
        task: str,
        type: str,
        remindertime: str,
        remind_at: float | None,
        timeofentry: str | None = None,
        completestatus: bool = False,
        currentstatus: bool = False,
    ) -> Task:
        if not task or not task.strip():
            raise ValueError("task is required")
        if not remindertime or not remindertime.strip():
            raise ValueError("remindertime is required")

        now = time.time()
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO post(
                    user_id, task, type, created_at, timeofentry,
                    remindertime, remind_at, completestatus, currentstatus
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    int(user_id),
                    task.strip(),
                    type,
                    now,
                    timeofentry,
                    remindertime.strip(),
                    remind_at,
                    int(bool(completestatus)),
                    int(bool(currentstatus)),
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageError("SQLite did not return lastrowid for post insert")
            task_id = int(rowid)
            logger.debug(
                "Task added id=%s user_id=%s type=%s remindertime=%s",
                task_id,
                user_id,
                type,
                remindertime,
            )
        finally:
            conn.close()

        created = self.get_task(task_id)
        if created is None:
            raise StorageError(f"Task {task_id} vanished right after insert")
        return created

    def get_task(self, task_id: int) -> Task | None:
        if not _is_rowid(task_id):
            return None
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM post WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_tasks(self, user_id: int, *, completestatus: bool, currentstatus: bool) -> list[Task]:
        """User's tasks in one soft state, newest first."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT *
                FROM post
                WHERE user_id = ?
                  AND completestatus = ?
                  AND currentstatus = ?
                ORDER BY created_at DESC, id DESC
                """,
                (int(user_id), int(bool(completestatus)), int(bool(currentstatus))),
            )
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def list_user_tasks(self, user_id: int) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM post WHERE user_id = ? ORDER BY created_at DESC, id DESC",
                (int(user_id),),
            )
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()

    def _update_owned(self, task_id: int, user_id: int, fields: list[str], params: list[Any]) -> Task | None:
        if not _is_rowid(task_id):
            return None
        if not fields:
            task = self.get_task(task_id)
            return task if task is not None and task.user_id == int(user_id) else None

        sql = f"UPDATE post SET {', '.join(fields)} WHERE id = ? AND user_id = ?"
        conn = self._get_conn()
        try:
            cur = conn.execute(sql, [*params, int(task_id), int(user_id)])
            conn.commit()
            if cur.rowcount != 1:
                return None
        finally:
            conn.close()
        return self.get_task(task_id)

    def update_task_flags(
        self,
        task_id: int,
        user_id: int,
        *,
        completestatus: bool | None = None,
        currentstatus: bool | None = None,
    ) -> Task | None:
        """
        Set completion/current flags on a task owned by user_id.

        Returns the updated task, or None when no such task belongs to the user.
        """
        fields: list[str] = []
        params: list[Any] = []

        if completestatus is not None:
            fields.append("completestatus = ?")
            params.append(int(bool(completestatus)))

        if currentstatus is not None:
            fields.append("currentstatus = ?")
            params.append(int(bool(currentstatus)))

        return self._update_owned(task_id, user_id, fields, params)

    def update_task_content(
        self, task_id: int, user_id: int, *, task: str, type: str | None = None
    ) -> Task | None:
        fields = ["task = ?"]
        params: list[Any] = [task.strip()]
        if type is not None:
            fields.append("type = ?")
            params.append(type)
        return self._update_owned(task_id, user_id, fields, params)

    # ---- scheduler ----

    def find_due_tasks(self, window: ReminderWindow) -> list[Task]:
        """
        Pending-completion tasks whose reminder instant lies in window (bounds inclusive).

        currentstatus is not consulted; only the completion flag gates reminders.
        """
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT *
                FROM post
                WHERE completestatus = 0
                  AND remind_at IS NOT NULL
                  AND remind_at BETWEEN ? AND ?
                """,
                (window.lower_ts, window.upper_ts),
            )
            return [self._row_to_task(r) for r in cur.fetchall()]
        finally:
            conn.close()
