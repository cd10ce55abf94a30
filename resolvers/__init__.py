"""resolvers/ -- The ownership-enforced resolution layer for Taskboard.

Each operation is a plain function `op(ctx, **arguments) -> envelope`. The
two registries below are the public surface the transport layers (api/ and
the CLI in main.py) dispatch through, keyed by the operation names clients use.

Layer rule: resolvers/ imports from auth/, tasks/ and core/. It does NOT
import from api/ or web/.
"""

from resolvers.context import ResolverContext
from resolvers.mutations import create_task, delete_task, login, register, update_task
from resolvers.queries import me, task, tasks

READ_OPERATIONS = {
    "me": me,
    "tasks": tasks,
    "task": task,
}

WRITE_OPERATIONS = {
    "register": register,
    "login": login,
    "createTask": create_task,
    "updateTask": update_task,
    "deleteTask": delete_task,
}

OPERATIONS = {**READ_OPERATIONS, **WRITE_OPERATIONS}

__all__ = ["OPERATIONS", "READ_OPERATIONS", "WRITE_OPERATIONS", "ResolverContext"]
