"""
Trazure Backend — Shared Response Schemas
===========================================

Error envelope, health check and upload responses used across routes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "latitude must be between -90 and 90",
            "details": {"field": "latitude"},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class UploadResponse(BaseModel):
    """Where an uploaded photo was stored and the URL it is served from."""
    path: str = Field(description="Path relative to the uploads directory")
    url: str = Field(description="URL path under /uploads")
