"""
Custom exceptions for the EventLens API
"""

from fastapi import status


class AnalyticsException(Exception):
    """Base exception for EventLens"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred."):
        super().__init__(message)
        self.message = message


class ValidationError(AnalyticsException):
    """Missing or malformed request field"""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"


class AuthenticationError(AnalyticsException):
    """Missing or invalid API key, or no logged-in owner"""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthenticated"


class NotFoundError(AnalyticsException):
    """Resource absent or not owned by the caller; both read the same"""

    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"


class CacheUnavailableError(AnalyticsException):
    """Cache backend unreachable. Never surfaced to API callers."""

    error = "cache_unavailable"
