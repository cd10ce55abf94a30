"""
tests/conftest.py -- Shared test fixtures for Taskboard.

This module provides:
  - user_store / task_store: isolated in-memory stores for unit tests
  - make_ctx: builds a ResolverContext around those stores and a session holder
  - _make_test_stores(): named shared-memory DBs for the HTTP tests
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient over the real app with fresh stores per test

Design: Named shared-memory SQLite URIs (not plain :memory:) are required for
the HTTP tests because TestClient runs sync route handlers in a thread pool.
Plain :memory: DBs are per-connection and would present a blank schema to
each worker thread.

Environment must be set before any auth/core import:
  DEBUG=true            -- get_settings() auto-generates SECRET_KEY
  BCRYPT_ROUNDS=4       -- the minimum cost keeps hashing fast in tests
  LOGIN_RATE_LIMIT      -- high enough that login-heavy tests never hit 429
  ALLOWED_HOSTS         -- TestClient sends Host: testserver
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator
from contextlib import asynccontextmanager

# CRITICAL: Set these before any auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.session import GlobalSession, SessionHolder
from auth.store import UserStore
from core.config import get_settings
from resolvers.context import ResolverContext
from tasks.store import TaskStore

# ---------------------------------------------------------------------------
# Unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def user_store() -> Generator[UserStore, None, None]:
    store = UserStore("sqlite:///:memory:")
    yield store
    store.close()


@pytest.fixture
def task_store() -> Generator[TaskStore, None, None]:
    store = TaskStore("sqlite:///:memory:")
    yield store
    store.close()


@pytest.fixture
def make_ctx(user_store: UserStore, task_store: TaskStore) -> Callable[..., ResolverContext]:
    """Return a factory: make_ctx(session=None) -> ResolverContext over the shared stores.

    Contexts built from one factory share the stores, so two contexts with
    different sessions behave like two callers of the same deployment.
    """

    def _make(session: SessionHolder | None = None) -> ResolverContext:
        return ResolverContext(users=user_store, tasks=task_store, session=session or GlobalSession())

    return _make


@pytest.fixture
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch, None, None]:
    """Let a test change env vars and see them through get_settings().

    Yields monkeypatch; call monkeypatch.setenv(...) then get_settings.cache_clear().
    """
    yield monkeypatch
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


def _make_test_stores(db_suffix: str) -> tuple[UserStore, TaskStore]:
    """Create isolated named shared-memory SQLite stores.

    Args:
        db_suffix: Unique string appended to the DB name so tests never share state.
    """
    users_url = f"sqlite:///file:test_users_{db_suffix}?mode=memory&cache=shared&uri=true"
    tasks_url = f"sqlite:///file:test_tasks_{db_suffix}?mode=memory&cache=shared&uri=true"
    return UserStore(db_url=users_url), TaskStore(db_url=tasks_url)


def _patch_lifespan(user_store: UserStore, task_store: TaskStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.task_store = task_store
        yield

    return test_lifespan


@pytest.fixture
def api_client() -> Generator[TestClient, None, None]:
    """Yield a TestClient over the real app with empty, isolated stores.

    Function-scoped: the client's cookie jar is the session in token mode, so
    sharing a client between tests would leak logins from one test to the next.
    """
    user_store, task_store = _make_test_stores(uuid.uuid4().hex)
    app.router.lifespan_context = _patch_lifespan(user_store, task_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client

    app.dependency_overrides.clear()
    user_store.close()
    task_store.close()
