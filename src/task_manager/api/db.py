from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, List, Optional

from ..schemas import TaskCreate, TaskRecord, TaskReplace
from .repositories import DuplicateTaskError, Repository


@dataclass(frozen=True)
class _Cols:
    table: str = "tasks"
    seq: str = "seq"
    id: str = "id"
    name: str = "name"
    description: str = "description"
    created_at: str = "created_at"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    Lightweight SQLite repository implementing the Repository interface.

    Rows carry an autoincrement sequence column so listings come back in
    insertion order regardless of the opaque client ids.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.seq} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {_COLS.id} TEXT NOT NULL UNIQUE,
                    {_COLS.name} TEXT NOT NULL,
                    {_COLS.description} TEXT NOT NULL DEFAULT '',
                    {_COLS.created_at} TEXT NOT NULL DEFAULT ''
                )
                """
            )

    def _row_to_record(self, row: sqlite3.Row) -> TaskRecord:
        return TaskRecord(
            id=str(row[_COLS.id]),
            name=str(row[_COLS.name]),
            description=row[_COLS.description] or "",
            created_at=row[_COLS.created_at] or "",
        )

    def _select_one(self, conn: sqlite3.Connection, task_id: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (task_id,)
        ).fetchone()

    def create(self, data: TaskCreate) -> TaskRecord:
        with self._conn() as conn:
            try:
                conn.execute(
                    f"""
                    INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.name}, {_COLS.description}, {_COLS.created_at})
                    VALUES (?, ?, ?, ?)
                    """,
                    (data.id, data.name, data.description, data.created_at),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateTaskError(data.id) from exc
            row = self._select_one(conn, data.id)
            assert row is not None
            return self._row_to_record(row)

    def get(self, task_id: str) -> Optional[TaskRecord]:
        with self._conn() as conn:
            row = self._select_one(conn, task_id)
            return self._row_to_record(row) if row else None

    def replace(self, task_id: str, data: TaskReplace) -> Optional[TaskRecord]:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.name} = ?, {_COLS.description} = ?, {_COLS.created_at} = ?
                WHERE {_COLS.id} = ?
                """,
                (data.name, data.description, data.created_at, task_id),
            )
            if cur.rowcount == 0:
                return None
            row = self._select_one(conn, task_id)
            assert row is not None
            return self._row_to_record(row)

    def delete(self, task_id: str) -> bool:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (task_id,))
            return cur.rowcount > 0

    def list(self) -> List[TaskRecord]:
        with self._conn() as conn:
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.seq} ASC"
            ).fetchall()
            return [self._row_to_record(r) for r in rows]
