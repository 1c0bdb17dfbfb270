"""
Error taxonomy for the account workflows.

Every error carries the HTTP status the API boundary answers with and a
message that is safe to show to the client.
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto a JSON error envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User not authenticated"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class UpstreamError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upstream service unavailable"


class InternalError(AppError):
    pass
