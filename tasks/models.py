"""
tasks/models.py -- Domain dataclass for task records.

Pure data container with zero logic. Ownership filtering and timestamp
stamping live in tasks/store.py.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Task:
    """A to-do item owned by exactly one user.

    owner_id is the owning user's store id. It is a plain column, not a
    foreign key: every read and write in TaskStore filters on it, which is
    the only place ownership is enforced. It never changes after insert.

    id, created_at and updated_at are None before the record is written.
    """

    title: str
    owner_id: int
    description: Optional[str] = None
    completed: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
