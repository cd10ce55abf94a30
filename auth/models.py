"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in tasks/models.py -- dataclasses own domain shape; stores and resolvers do
the work.

Layer rule: no imports from api/, web/, tasks/, or resolvers/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """A registered account.

    hashed_password is the bcrypt output and must never be rendered by any
    response model. created_at is a native UTC datetime set by the store.
    id is None before the record is written to the database.
    """

    username: str
    email: str
    hashed_password: str
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class SessionIdentity:
    """The authenticated identity held by a session.

    id is the user's store id as an opaque string; created_at is already
    rendered as ISO-8601 so the identity can be echoed back verbatim by `me`.
    """

    id: str
    username: str
    email: str
    created_at: str
