"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    database_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_PATTERN = "INVALID_PATTERN"
    INVALID_HIGHLIGHTS = "INVALID_HIGHLIGHTS"
    INVALID_TIMEZONE = "INVALID_TIMEZONE"
    CREDENTIAL_NOT_FOUND = "CREDENTIAL_NOT_FOUND"
    CORRUPT_RECORD = "CORRUPT_RECORD"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
