"""
api/context.py -- Builds the ResolverContext for each HTTP request.

The stores come from app.state (opened once in the lifespan); the session
holder comes from auth.dependencies.get_session, which is where the token
vs. global session mode is decided.
"""

from __future__ import annotations

from fastapi import Depends, Request

from auth.dependencies import get_session
from auth.session import SessionHolder
from resolvers.context import ResolverContext


def get_context(request: Request, session: SessionHolder = Depends(get_session)) -> ResolverContext:
    return ResolverContext(
        users=request.app.state.user_store,
        tasks=request.app.state.task_store,
        session=session,
    )
