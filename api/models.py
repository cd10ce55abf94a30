"""
API request and response models for Taskboard REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
Operation results (UserResult, TaskResult, ...) live in resolvers/results.py
because every transport returns them unchanged; the models here cover only
request bodies and the transport-level error and health envelopes.

Request bodies check shape and length only. Blank values pass through so the
resolvers can report them in the result envelope like any other domain error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /api/v1/auth/register."""

    username: str = Field(max_length=255)
    email: str = Field(max_length=320)
    # Request-size cap only. The 72-byte bcrypt limit is a byte count, so the
    # register resolver checks it and reports it in the result envelope.
    password: str = Field(max_length=1024)


class LoginRequest(BaseModel):
    """Request body for POST /api/v1/auth/login."""

    email: str = Field(max_length=320)
    password: str = Field(max_length=1024)


class TaskCreate(BaseModel):
    """Request body for POST /api/v1/tasks."""

    title: str = Field(max_length=500)
    description: Optional[str] = Field(default=None, max_length=5000)


class TaskPatch(BaseModel):
    """Request body for PATCH /api/v1/tasks/{task_id}.

    Routes forward model_dump(exclude_unset=True), so a key that is absent
    from the JSON body is never written, while "description": null clears it.
    """

    title: Optional[str] = Field(default=None, max_length=500)
    description: Optional[str] = Field(default=None, max_length=5000)
    completed: Optional[bool] = None


# ---------------------------------------------------------------------------
# Transport envelopes
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope for failures outside the operation results (4xx/5xx)."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
