"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Dict, Optional, Any

from pydantic import BaseModel, StrictStr, ValidationInfo, field_validator

from app.models.paste import normalize_limit


# Client-facing messages for request fields that fail validation
FIELD_ERROR_MESSAGES: Dict[str, str] = {
    "content": "content is required and must be a non-empty string",
    "ttl_seconds": "ttl_seconds must be an integer >= 1",
    "max_views": "max_views must be an integer >= 1",
}
INVALID_BODY_MESSAGE = "Invalid request body"


def validation_error_message(errors: list) -> str:
    """Pick the message for the first failing field of a request body."""
    for error in errors:
        loc = error.get("loc", ())
        if error.get("type") == "json_invalid" or len(loc) < 2:
            return INVALID_BODY_MESSAGE
        message = FIELD_ERROR_MESSAGES.get(str(loc[1]))
        if message:
            return message
    return INVALID_BODY_MESSAGE


class PasteCreateRequest(BaseModel):
    """Request schema for creating a paste.

    ``ttl_seconds`` and ``max_views`` may be omitted, but an explicit null is
    rejected. Integral floats such as ``5.0`` are accepted.
    """
    content: StrictStr
    ttl_seconds: Optional[int] = None
    max_views: Optional[int] = None

    @field_validator("content")
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(FIELD_ERROR_MESSAGES["content"])
        return v

    @field_validator("ttl_seconds", "max_views", mode="before")
    def valid_limit(cls, v: Any, info: ValidationInfo) -> int:
        return normalize_limit(info.field_name, v)


class PasteCreateResponse(BaseModel):
    """Response schema for a created paste."""
    id: str
    url: str  # Shareable page URL including base domain


class PasteViewResponse(BaseModel):
    """Response schema for a fetched paste."""
    content: str
    remaining_views: Optional[int] = None  # Views left after this one, null if unlimited
    expires_at: Optional[str] = None  # ISO-8601 UTC, null if no TTL


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    error: str
    error_id: Optional[str] = None


class HealthCheck(BaseModel):
    """Response schema for the minimal health probe."""
    ok: bool


class HealthStatus(BaseModel):
    """Response schema for the detailed health check."""
    status: str
    version: str
    environment: str
    timestamp: float
    components: Dict[str, Dict[str, Any]]
