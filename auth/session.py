"""
auth/session.py -- Session holders: where the authenticated identity lives.

Two implementations share the get()/set() contract the resolvers rely on:

  GlobalSession  -- one process-wide slot. Empty at start, set by a successful
                    login, never cleared. There is NO isolation between
                    callers: under concurrent requests the last login replaces
                    the identity for every later operation in the process.
                    Used by the CLI (one process, one user) and by the API
                    only when SESSION_MODE=global.

  RequestSession -- one slot per request, seeded from the caller's token by
                    auth/dependencies.py. A login sets it and the route then
                    issues a fresh token, so identities never leak between
                    requests.

Layer rule: no imports from api/, web/, tasks/, or resolvers/.
"""

from __future__ import annotations

from typing import Protocol

from auth.models import SessionIdentity, User
from core.timeutil import render_timestamp


class SessionHolder(Protocol):
    def get(self) -> SessionIdentity | None: ...

    def set(self, identity: SessionIdentity) -> None: ...


class GlobalSession:
    """Single mutable identity slot shared by everything that holds a reference.

    No locking: set() is a plain attribute swap and the last writer wins.
    """

    def __init__(self) -> None:
        self._identity: SessionIdentity | None = None

    def get(self) -> SessionIdentity | None:
        return self._identity

    def set(self, identity: SessionIdentity) -> None:
        self._identity = identity


class RequestSession:
    """Identity slot scoped to a single request."""

    def __init__(self, identity: SessionIdentity | None = None) -> None:
        self._identity = identity
        self.changed = False

    def get(self) -> SessionIdentity | None:
        return self._identity

    def set(self, identity: SessionIdentity) -> None:
        self._identity = identity
        self.changed = True


# The process-wide slot used when SESSION_MODE=global.
_global_session = GlobalSession()


def get_global_session() -> GlobalSession:
    return _global_session


def identity_from_user(user: User) -> SessionIdentity:
    """Build the session identity for a stored user (credential omitted)."""
    return SessionIdentity(
        id=str(user.id),
        username=user.username,
        email=user.email,
        created_at=render_timestamp(user.created_at),
    )
