"""
API error types.
"""

from typing import Optional


class ApiError(Exception):
    """Request failed or the server returned an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConnectionFailedError(ApiError):
    """No response was received from the server."""


class AuthenticationError(ApiError):
    """Login rejected or session expired."""


class PayloadError(ApiError):
    """Response body did not match the expected record shape."""
