"""
tasks/store.py -- SQLAlchemy-backed persistence layer for task records.

Uses SQLAlchemy Core (not ORM) so the dataclass in tasks/models.py remains
the authoritative domain representation. Swapping SQLite for PostgreSQL is a
connection string change.

Pattern: Repository + Data Mapper. TaskStore is the repository, _row_to_task
is the mapper. Resolvers never touch SQL directly.

Ownership: every method except create_task takes owner_id and puts it in the
WHERE clause next to the task id. A task owned by someone else is therefore
indistinguishable from a missing one -- there is no unfiltered fetch to leak
its existence.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = TaskStore()
    task_id = store.create_task(Task(title="buy milk", owner_id=1))
    store.update_by_id_and_owner(task_id, 1, completed=True)
    tasks = store.list_by_owner(1)
    store.close()
"""

import re
from typing import Optional, Union

from sqlalchemy import Boolean, Column, DateTime, Integer, MetaData, String, Table, Text, create_engine, event, text
from sqlalchemy.engine import Engine

from core.config import get_settings
from core.errors import ValidationError
from core.timeutil import ensure_utc, utc_now
from tasks.models import Task

# Fields a caller may change after creation. owner_id and created_at are
# immutable; updated_at is always stamped by the store.
_UPDATABLE_FIELDS: frozenset[str] = frozenset({"title", "description", "completed"})

_ID_RE = re.compile(r"^[1-9][0-9]{0,17}$")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(500), nullable=False),
    Column("description", Text),
    Column("completed", Boolean, nullable=False, server_default="0"),
    Column("owner_id", Integer, nullable=False, index=True),  # not a FK, see module docstring
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_task_id(raw: Union[str, int]) -> int:
    """Convert a boundary identifier into the store's integer key.

    Raises ValidationError for anything that is not a positive decimal
    integer. This runs before any SQL, so a malformed id never reaches the
    database and is reported differently from "not found".
    """
    if isinstance(raw, bool):
        raise ValidationError("Invalid task id")
    if isinstance(raw, int):
        if raw < 1:
            raise ValidationError("Invalid task id")
        return raw
    if not isinstance(raw, str) or not _ID_RE.match(raw.strip()):
        raise ValidationError("Invalid task id")
    return int(raw.strip())


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TaskStore:
    """Repository for Task entities, always scoped by owner."""

    def __init__(self, db_url: Optional[str] = None) -> None:
        db_url = db_url or get_settings().database_url
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite") and ":memory:" not in db_url and "mode=memory" not in db_url:
            event.listen(self.engine, "connect", _set_wal_mode)
        metadata.create_all(self.engine)

    def list_by_owner(self, owner_id: int) -> list[Task]:
        """Return every task owned by owner_id in insertion order."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                _tasks.select().where(_tasks.c.owner_id == owner_id).order_by(_tasks.c.id)
            ).fetchall()
        return [_row_to_task(r) for r in rows]

    def get_by_id_and_owner(self, task_id: Union[str, int], owner_id: int) -> Optional[Task]:
        """Return the task if it exists AND belongs to owner_id, else None."""
        key = parse_task_id(task_id)
        with self.engine.connect() as conn:
            row = conn.execute(
                _tasks.select().where((_tasks.c.id == key) & (_tasks.c.owner_id == owner_id))
            ).fetchone()
        return _row_to_task(row) if row is not None else None

    def create_task(self, task: Task) -> int:
        """Insert a task and return its id. created_at and updated_at are the same instant."""
        now = utc_now()
        with self.engine.connect() as conn:
            result = conn.execute(
                _tasks.insert().values(
                    title=task.title,
                    description=task.description,
                    completed=task.completed,
                    owner_id=task.owner_id,
                    created_at=now,
                    updated_at=now,
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def update_by_id_and_owner(self, task_id: Union[str, int], owner_id: int, **fields) -> int:
        """Apply the given fields to one owned task and return the matched row count.

        Only keys in _UPDATABLE_FIELDS are accepted; anything else raises
        ValueError rather than being silently ignored. Keys that are absent
        are left untouched. updated_at is always refreshed, so an update
        with no fields still counts as a match when the task is owned.
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown task fields: {sorted(unknown)!r}")
        key = parse_task_id(task_id)
        values = dict(fields)
        values["updated_at"] = utc_now()
        with self.engine.connect() as conn:
            result = conn.execute(
                _tasks.update().where((_tasks.c.id == key) & (_tasks.c.owner_id == owner_id)).values(**values)
            )
            conn.commit()
        return result.rowcount

    def delete_by_id_and_owner(self, task_id: Union[str, int], owner_id: int) -> int:
        """Delete one owned task and return the deleted row count (0 or 1)."""
        key = parse_task_id(task_id)
        with self.engine.connect() as conn:
            result = conn.execute(_tasks.delete().where((_tasks.c.id == key) & (_tasks.c.owner_id == owner_id)))
            conn.commit()
        return result.rowcount

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_task(row) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description,
        completed=bool(row.completed),
        owner_id=row.owner_id,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )
