"""
api/routes/v1/tasks.py -- Task CRUD routes for the Taskboard REST API.

Routes:
  GET    /tasks             -- tasks owned by the session (insertion order)
  GET    /tasks/{task_id}   -- one owned task
  POST   /tasks             -- create a task owned by the session
  PATCH  /tasks/{task_id}   -- partial update (only keys present in the body)
  DELETE /tasks/{task_id}   -- delete an owned task

Auth: these routes do not reject anonymous callers with 401. The resolvers
check the session themselves and answer "Authentication required" inside the
result envelope, which keeps every operation's response shape identical.

task_id is taken as a string so a malformed id reaches the resolver and comes
back as a validation error in the envelope rather than as a 422.
"""

from fastapi import APIRouter, Depends

from api.context import get_context
from api.models import TaskCreate, TaskPatch
from resolvers import mutations, queries
from resolvers.context import ResolverContext
from resolvers.results import DeleteResult, TaskListResult, TaskResult

router = APIRouter()


@router.get("/tasks", response_model=TaskListResult)
def list_tasks(ctx: ResolverContext = Depends(get_context)) -> TaskListResult:
    return queries.tasks(ctx)


@router.get("/tasks/{task_id}", response_model=TaskResult)
def get_task(task_id: str, ctx: ResolverContext = Depends(get_context)) -> TaskResult:
    return queries.task(ctx, id=task_id)


@router.post("/tasks", response_model=TaskResult)
def create_task(body: TaskCreate, ctx: ResolverContext = Depends(get_context)) -> TaskResult:
    """Create a task. completed always starts false; the owner is the session identity."""
    return mutations.create_task(ctx, title=body.title, description=body.description)


@router.patch("/tasks/{task_id}", response_model=TaskResult)
def update_task(task_id: str, body: TaskPatch, ctx: ResolverContext = Depends(get_context)) -> TaskResult:
    """Apply only the fields present in the JSON body; updatedAt is always refreshed."""
    return mutations.update_task(ctx, id=task_id, **body.model_dump(exclude_unset=True))


@router.delete("/tasks/{task_id}", response_model=DeleteResult)
def delete_task(task_id: str, ctx: ResolverContext = Depends(get_context)) -> DeleteResult:
    return mutations.delete_task(ctx, id=task_id)
