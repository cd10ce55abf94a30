"""
auth/dependencies.py -- FastAPI Depends() helpers for session resolution.

get_session() decides which SessionHolder a request sees:
  SESSION_MODE=token  (default) -- a fresh RequestSession seeded from the
      caller's JWT. Checked in priority order:
        1. JWT cookie ("access_token") -- set by the login route.
        2. Authorization: Bearer <token> header -- API clients.
      The user is re-read from the store so a token for a vanished account
      yields an empty session.
  SESSION_MODE=global -- the process-wide GlobalSession. Every caller shares
      it; the last successful login wins.

Neither path raises: an empty session is a valid state and the resolvers
report "Authentication required" themselves.

Layer rule: no imports from web/, tasks/, or resolvers/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import SessionIdentity
from auth.session import RequestSession, SessionHolder, get_global_session, identity_from_user
from auth.store import UserStore
from auth.tokens import COOKIE_NAME, decode_access_token
from core.config import get_settings


def _token_from_request(request: Request) -> str | None:
    token: str | None = request.cookies.get(COOKIE_NAME)
    if not token:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[7:]
    return token or None


def identity_from_request(request: Request) -> SessionIdentity | None:
    """Return the identity named by the request's token, or None."""
    token = _token_from_request(request)
    if not token:
        return None
    user_id = decode_access_token(token)
    if user_id is None or not user_id.isdigit():
        return None
    user_store: UserStore = request.app.state.user_store
    user = user_store.get_by_id(int(user_id))
    return identity_from_user(user) if user is not None else None


def get_session(request: Request) -> SessionHolder:
    """FastAPI dependency returning the session holder for this request."""
    if get_settings().session_mode == "global":
        return get_global_session()
    return RequestSession(identity_from_request(request))
