"""
api/routes/v1/auth.py -- Account and session REST endpoints.

Routes:
  POST /api/v1/auth/register  -- create an account
  POST /api/v1/auth/login     -- verify credentials; sets JWT cookie in token mode
  GET  /api/v1/auth/me        -- identity of the active session

Every route answers 200 with a UserResult envelope; domain failures are in
its `error` field. Only request-body schema violations (422) and unexpected
server errors (500) use the ErrorResponse envelope.

There is no logout route: a session is never explicitly invalidated. In token
mode the cookie simply expires (TOKEN_EXPIRE_SECONDS).

Security:
  POST /login is rate-limited per IP (LOGIN_RATE_LIMIT).
  Cache-Control: no-store on login responses.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.context import get_context
from api.limiter import limiter
from api.models import LoginRequest, RegisterRequest
from auth.session import RequestSession
from auth.tokens import create_access_token, set_auth_cookie
from core.config import get_settings
from resolvers import mutations, queries
from resolvers.context import ResolverContext
from resolvers.results import UserResult

router = APIRouter()


@router.post("/auth/register", response_model=UserResult)
def register(body: RegisterRequest, ctx: ResolverContext = Depends(get_context)) -> UserResult:
    """Create an account. The response never includes the password hash."""
    return mutations.register(ctx, username=body.username, email=body.email, password=body.password)


@limiter.limit(get_settings().login_rate_limit)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/auth/login", response_model=UserResult)
def login(request: Request, body: LoginRequest, ctx: ResolverContext = Depends(get_context)) -> JSONResponse:
    """Authenticate with email and password.

    On success the session holder is set. In token mode that holder only
    lives for this request, so the identity is handed back to the client as
    an httpOnly JWT cookie; in global mode the process-wide slot already
    carries it and no cookie is issued.
    """
    result = mutations.login(ctx, email=body.email, password=body.password)
    resp = JSONResponse(content=result.model_dump(mode="json", by_alias=True))
    session = ctx.session
    if result.user is not None and isinstance(session, RequestSession) and session.changed:
        set_auth_cookie(resp, create_access_token(result.user.id))
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/auth/me", response_model=UserResult)
def me(ctx: ResolverContext = Depends(get_context)) -> UserResult:
    """Return the active session's identity, or a "Not authenticated" error."""
    return queries.me(ctx)
