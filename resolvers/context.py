"""
resolvers/context.py -- The per-operation context handed to every resolver.
"""

from __future__ import annotations

from dataclasses import dataclass

from auth.models import SessionIdentity
from auth.session import SessionHolder
from auth.store import UserStore
from core.errors import AuthorizationError
from tasks.store import TaskStore


@dataclass
class ResolverContext:
    """Store handles plus the session holder for the current caller.

    The API builds one per request (with a RequestSession in token mode, or
    the shared GlobalSession in global mode); the CLI builds one per process.
    """

    users: UserStore
    tasks: TaskStore
    session: SessionHolder

    def require_identity(self, message: str = "Authentication required") -> SessionIdentity:
        """Return the active identity or raise AuthorizationError."""
        identity = self.session.get()
        if identity is None:
            raise AuthorizationError(message)
        return identity

    def owner_id(self) -> int:
        """Owner filter value for the active session (raises if unauthenticated)."""
        return int(self.require_identity().id)
