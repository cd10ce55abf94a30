"""
resolvers/queries.py -- Read operations: me, tasks, task.

Every task query filters by the session's owner id inside the store call.
There is no unfiltered fetch followed by an ownership comparison, so a task
owned by someone else looks exactly like a missing one.
"""

from __future__ import annotations

from core.errors import NotFoundOrForbiddenError
from resolvers.context import ResolverContext
from resolvers.results import TaskListResult, TaskPayload, TaskResult, UserPayload, UserResult, envelope
from tasks.store import parse_task_id


@envelope(UserResult)
def me(ctx: ResolverContext) -> UserResult:
    """Return the active session's identity."""
    identity = ctx.require_identity("Not authenticated")
    return UserResult(user=UserPayload.from_identity(identity))


@envelope(TaskListResult)
def tasks(ctx: ResolverContext) -> TaskListResult:
    """All tasks owned by the session identity, in insertion order."""
    owner_id = ctx.owner_id()
    return TaskListResult(tasks=[TaskPayload.from_task(t) for t in ctx.tasks.list_by_owner(owner_id)])


@envelope(TaskResult)
def task(ctx: ResolverContext, *, id: str) -> TaskResult:
    owner_id = ctx.owner_id()
    found = ctx.tasks.get_by_id_and_owner(parse_task_id(id), owner_id)
    if found is None:
        raise NotFoundOrForbiddenError("Task not found")
    return TaskResult(task=TaskPayload.from_task(found))
