"""
core/errors.py -- Domain error kinds raised inside the resolution layer.

Resolvers raise these and the envelope decorator in resolvers/results.py turns
them into the `error` field of the result object. They never cross the
operation boundary. Store-layer failures (SQLAlchemyError) are deliberately
NOT subclasses of TaskboardError, so they propagate to the API's catch-all
handler instead of being reported as a domain outcome.
"""


class TaskboardError(Exception):
    """Base class for every domain error. str(exc) is the user-facing message."""


class AuthorizationError(TaskboardError):
    """The operation needs an authenticated session and none is active."""


class NotFoundOrForbiddenError(TaskboardError):
    """The record is absent or belongs to another owner.

    Both cases share one error so callers cannot probe for other users' ids.
    """


class ValidationError(TaskboardError):
    """Malformed identifier or missing required field. Raised before any store access."""


class ConflictError(TaskboardError):
    """A uniqueness rule rejected the write (e.g. email already registered)."""


class CredentialsError(TaskboardError):
    """Login failed: unknown email or wrong password."""
