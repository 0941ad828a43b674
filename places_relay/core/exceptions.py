"""
Error taxonomy for the places relay.

Every error that reaches the HTTP layer is a RelayError; the handler in
main.py renders it as {"error", "code", "details"} with its status code.
Per-category fan-out failures are absorbed before they get here.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    MISSING_API_KEY = "MISSING_API_KEY"
    MISSING_INPUT = "MISSING_INPUT"
    INVALID_INPUT = "INVALID_INPUT"
    GEOCODE_NOT_FOUND = "GEOCODE_NOT_FOUND"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"


class RelayError(Exception):
    """Base exception for the relay."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ConfigurationError(RelayError):
    """Raised when no usable upstream credential is available."""

    def __init__(self):
        super().__init__(
            message="Google API key is required. Set GOOGLE_API_KEY env variable or pass ?key=YOUR_KEY",
            error_code=ErrorCode.MISSING_API_KEY,
            status_code=400
        )


class MissingInputError(RelayError):
    """Raised when a required request field is absent."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Missing required parameter '{field}'",
            error_code=ErrorCode.MISSING_INPUT,
            details={"field": field},
            status_code=400
        )


class InvalidInputError(RelayError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_INPUT,
            details=details,
            status_code=400
        )


class GeocodeNotFoundError(RelayError):
    """Raised when the query cannot be resolved to a coordinate."""

    def __init__(self, address: str):
        super().__init__(
            message=f"Could not geocode location '{address}'",
            error_code=ErrorCode.GEOCODE_NOT_FOUND,
            details={"query": address},
            status_code=400
        )


class UpstreamError(RelayError):
    """Raised when a provider call fails outside the category fan-out."""

    def __init__(self, operation: str, reason: str = ""):
        details = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            message="Failed to fetch places data",
            error_code=ErrorCode.UPSTREAM_FAILURE,
            details=details,
            status_code=500
        )
