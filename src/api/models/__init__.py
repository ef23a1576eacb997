"""Health and error response models."""

from .responses import ErrorCodes, ErrorResponse, HealthResponse

__all__ = ["ErrorCodes", "ErrorResponse", "HealthResponse"]
