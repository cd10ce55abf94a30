"""
resolvers/results.py -- Result envelopes returned by every operation.

Every operation returns `{<payload>: T | null, error: str | null}` (or
`{success: bool, error: str | null}` for deletes). Exactly one of payload and
error is set; the model validators refuse any other combination so a resolver
bug cannot produce an ambiguous response.

JSON field names are camelCase (createdAt, updatedAt) via the alias
generator; Python code uses the snake_case attribute names.

The `envelope` decorator is the operation boundary: domain errors raised
inside a resolver become the `error` field here and never escape. Anything
that is not a TaskboardError (store failures included) propagates.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from auth.models import SessionIdentity
from core.errors import TaskboardError
from core.timeutil import render_timestamp
from tasks.models import Task

logger = logging.getLogger("taskboard.resolvers")

_MODEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class UserPayload(BaseModel):
    """Public view of a user. There is deliberately no password field."""

    model_config = _MODEL_CONFIG

    id: str
    username: str
    email: str
    created_at: str

    @classmethod
    def from_identity(cls, identity: SessionIdentity) -> "UserPayload":
        return cls(
            id=identity.id,
            username=identity.username,
            email=identity.email,
            created_at=identity.created_at,
        )


class TaskPayload(BaseModel):
    """Public view of a task. owner_id stays internal."""

    model_config = _MODEL_CONFIG

    id: str
    title: str
    description: Optional[str] = None
    completed: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskPayload":
        return cls(
            id=str(task.id),
            title=task.title,
            description=task.description,
            completed=task.completed,
            created_at=render_timestamp(task.created_at),
            updated_at=render_timestamp(task.updated_at),
        )


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


def _exactly_one(payload, error: Optional[str]) -> None:
    if (payload is None) == (error is None):
        raise ValueError("exactly one of payload and error must be set")


class UserResult(BaseModel):
    model_config = _MODEL_CONFIG

    user: Optional[UserPayload] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check(self) -> "UserResult":
        _exactly_one(self.user, self.error)
        return self

    @classmethod
    def failure(cls, message: str) -> "UserResult":
        return cls(error=message)


class TaskResult(BaseModel):
    model_config = _MODEL_CONFIG

    task: Optional[TaskPayload] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check(self) -> "TaskResult":
        _exactly_one(self.task, self.error)
        return self

    @classmethod
    def failure(cls, message: str) -> "TaskResult":
        return cls(error=message)


class TaskListResult(BaseModel):
    """An empty `tasks` list is a success, not an error."""

    model_config = _MODEL_CONFIG

    tasks: Optional[list[TaskPayload]] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check(self) -> "TaskListResult":
        _exactly_one(self.tasks, self.error)
        return self

    @classmethod
    def failure(cls, message: str) -> "TaskListResult":
        return cls(error=message)


class DeleteResult(BaseModel):
    model_config = _MODEL_CONFIG

    success: bool = False
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check(self) -> "DeleteResult":
        if self.success == (self.error is not None):
            raise ValueError("success and error are mutually exclusive")
        return self

    @classmethod
    def failure(cls, message: str) -> "DeleteResult":
        return cls(success=False, error=message)


# ---------------------------------------------------------------------------
# Operation boundary
# ---------------------------------------------------------------------------


def envelope(result_cls) -> Callable:
    """Wrap a resolver so domain errors come back as `result_cls.failure(message)`."""

    def decorate(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(ctx, **kwargs):
            try:
                return fn(ctx, **kwargs)
            except TaskboardError as exc:
                logger.debug("%s rejected: %s (%s)", fn.__name__, exc, type(exc).__name__)
                return result_cls.failure(str(exc))

        return wrapper

    return decorate
