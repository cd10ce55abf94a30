"""
resolvers/mutations.py -- Write operations: register, login, createTask,
updateTask, deleteTask.

Ordering inside each task mutation is fixed: session check first, then input
validation (malformed id, blank title), then exactly one filtered store write.
Validation failures therefore never touch the database.

Login messages:
  By default "User not found" and "Invalid password" stay distinct, which
  tells a caller whether an email is registered. GENERIC_LOGIN_ERRORS=true
  collapses both into one message. Either way an unknown email still costs a
  bcrypt check against dummy_hash() so timing does not give it away.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.session import identity_from_user
from auth.tokens import MAX_PASSWORD_BYTES, dummy_hash, hash_password, password_too_long, verify_password
from core.config import get_settings
from core.errors import ConflictError, CredentialsError, NotFoundOrForbiddenError, ValidationError
from core.timeutil import utc_now
from resolvers.context import ResolverContext
from resolvers.results import DeleteResult, TaskPayload, TaskResult, UserPayload, UserResult, envelope
from tasks.models import Task
from tasks.store import parse_task_id

logger = logging.getLogger("taskboard.resolvers")

EMAIL_TAKEN = "Email already registered"
USER_NOT_FOUND = "User not found"
INVALID_PASSWORD = "Invalid password"
INVALID_CREDENTIALS = "Invalid email or password"
NOT_FOUND_OR_NOT_OWNED = "Task not found or not owned"
PASSWORD_TOO_LONG = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"

# Distinguishes "field not supplied" from an explicit None in partial updates.
_UNSET: Any = object()


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@envelope(UserResult)
def register(ctx: ResolverContext, *, username: str, email: str, password: str) -> UserResult:
    """Create an account. The returned user never carries the credential.

    The email pre-check is only a fast path; the UNIQUE constraint on
    users.email is what actually stops two concurrent registrations.
    """
    if _blank(username) or _blank(email) or not password:
        raise ValidationError("Username, email and password are required")
    if password_too_long(password):
        raise ValidationError(PASSWORD_TOO_LONG)
    if ctx.users.get_by_email(email) is not None:
        raise ConflictError(EMAIL_TAKEN)

    user = User(username=username, email=email, hashed_password=hash_password(password), created_at=utc_now())
    try:
        user.id = ctx.users.create_user(user)
    except IntegrityError as exc:
        raise ConflictError(EMAIL_TAKEN) from exc

    logger.info("Registered user_id=%s", user.id)
    return UserResult(user=UserPayload.from_identity(identity_from_user(user)))


@envelope(UserResult)
def login(ctx: ResolverContext, *, email: str, password: str) -> UserResult:
    """Verify credentials and make this identity the active session.

    A failed attempt leaves whatever session was active untouched.
    """
    if _blank(email) or not password:
        raise ValidationError("Email and password are required")
    generic = get_settings().generic_login_errors

    user = ctx.users.get_by_email(email)
    if user is None:
        verify_password(password, dummy_hash())
        raise CredentialsError(INVALID_CREDENTIALS if generic else USER_NOT_FOUND)
    if not verify_password(password, user.hashed_password):
        raise CredentialsError(INVALID_CREDENTIALS if generic else INVALID_PASSWORD)

    identity = identity_from_user(user)
    ctx.session.set(identity)
    logger.info("Login succeeded user_id=%s", user.id)
    return UserResult(user=UserPayload.from_identity(identity))


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@envelope(TaskResult)
def create_task(ctx: ResolverContext, *, title: str, description: Optional[str] = None) -> TaskResult:
    """Insert a task owned by the session identity. completed always starts False."""
    owner_id = ctx.owner_id()
    if _blank(title):
        raise ValidationError("Task title is required")

    task_id = ctx.tasks.create_task(Task(title=title, description=description, owner_id=owner_id))
    created = ctx.tasks.get_by_id_and_owner(task_id, owner_id)
    if created is None:
        raise NotFoundOrForbiddenError("Task not found")
    return TaskResult(task=TaskPayload.from_task(created))


@envelope(TaskResult)
def update_task(
    ctx: ResolverContext,
    *,
    id: str,
    title: Optional[str] = _UNSET,
    description: Optional[str] = _UNSET,
    completed: Optional[bool] = _UNSET,
) -> TaskResult:
    """Apply only the supplied fields. updated_at is refreshed on every match.

    description may be set to None to clear it; title and completed may not.
    """
    owner_id = ctx.owner_id()
    key = parse_task_id(id)

    fields: dict[str, Any] = {}
    if title is not _UNSET:
        if _blank(title):
            raise ValidationError("Task title cannot be empty")
        fields["title"] = title
    if description is not _UNSET:
        fields["description"] = description
    if completed is not _UNSET:
        if not isinstance(completed, bool):
            raise ValidationError("completed must be true or false")
        fields["completed"] = completed

    if ctx.tasks.update_by_id_and_owner(key, owner_id, **fields) == 0:
        raise NotFoundOrForbiddenError(NOT_FOUND_OR_NOT_OWNED)

    # A concurrent delete can land between the update and this read.
    updated = ctx.tasks.get_by_id_and_owner(key, owner_id)
    if updated is None:
        raise NotFoundOrForbiddenError("Task not found")
    return TaskResult(task=TaskPayload.from_task(updated))


@envelope(DeleteResult)
def delete_task(ctx: ResolverContext, *, id: str) -> DeleteResult:
    owner_id = ctx.owner_id()
    key = parse_task_id(id)
    if ctx.tasks.delete_by_id_and_owner(key, owner_id) == 0:
        raise NotFoundOrForbiddenError(NOT_FOUND_OR_NOT_OWNED)
    return DeleteResult(success=True)
