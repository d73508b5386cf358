"""
Noteful Backend: Shared Pydantic Schemas
==========================================

What:  Base model for the API contract plus the error and health bodies.
How:   Python attributes stay snake_case; the JSON side is camelCase
       (`folderId`, `createdAt`) through an alias generator. FastAPI
       serializes response models by alias, and `populate_by_name` lets
       tests and services build models with either spelling.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EntityResponse(ApiModel):
    """Fields every persisted entity exposes."""

    id: uuid.UUID = Field(description="Unique identifier (UUID)")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last update timestamp (UTC ISO 8601)")


class NamedResourceIn(ApiModel):
    """
    Request body for POST/PUT on folders and tags.

    `name` is optional at the schema level so a missing name reaches the
    service and produces the "Missing `name` in request body" message
    instead of a generic schema error.
    """

    name: Optional[str] = Field(default=None, description="Unique, non-empty name")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "The `id` is not valid",
            "details": {"field": "id"},
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
