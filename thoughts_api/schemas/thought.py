"""
Happy Thoughts API — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the JSON contract of the API.
How:   FastAPI uses these to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Schemas are separate from the SQLAlchemy model: the JSON keys are camelCase
(`createdAt`, `deletedThought`) while the table columns are snake_case.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ThoughtInput(BaseModel):
    """
    Body of POST /thoughts and PUT /thoughts/{id}.

    `message` is deliberately untyped: type and length are checked by
    thoughts_api.validation so every failure is reported in the
    {"error": "Validation failed", "messages": [...]} shape. Any other keys
    (hearts, createdAt, ...) are ignored.
    """

    message: Any = Field(default=None, description="Thought text, 5-140 characters")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ThoughtResponse(BaseModel):
    """A single thought as returned by every thought endpoint."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(description="Unique thought identifier (UUID)")
    message: str = Field(description="Thought text")
    hearts: int = Field(description="Number of likes")
    created_at: datetime = Field(
        alias="createdAt",
        description="When the thought was created (UTC ISO 8601)",
    )

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Timestamps are stored in UTC; some drivers hand them back naive."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ThoughtDeleteResponse(BaseModel):
    """Confirmation returned by DELETE /thoughts/{id}."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Thought deleted successfully"
    deleted_thought: ThoughtResponse = Field(alias="deletedThought")


class RouteInfo(BaseModel):
    path: str
    methods: List[str]


class WelcomeResponse(BaseModel):
    """GET / — welcome text plus every registered API route."""

    message: str
    routes: List[RouteInfo]


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body for not-found, malformed-id and storage failures.

    Example:
        {"error": "Invalid thought ID", "message": "'abc' is not a valid thought ID"}
    """

    error: str = Field(description="Error label")
    message: Optional[str] = Field(default=None, description="Error detail")


class ValidationErrorResponse(BaseModel):
    """
    Error body for rejected input; lists every failed rule.

    Example:
        {"error": "Validation failed", "messages": ["Message must be at least 5 characters"]}
    """

    error: str = Field(default="Validation failed")
    messages: List[str]


class HealthResponse(BaseModel):
    """GET /health — service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
