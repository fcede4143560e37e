"""Common exceptions."""

from fastapi import status

from taskhub.common.app_error import AppError
from taskhub.config.errors import ErrorCode, ErrorNames

__all__ = [
    "InvalidInputError",
    "NotFoundError",
    "UnauthenticatedError",
    "UnauthorizedError",
]


class NotFoundError(AppError):
    """Exception raised when something is not found."""

    error_code = ErrorCode.NOT_FOUND
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidInputError(AppError):
    """Exception raised when caller input fails validation."""

    error_code = ErrorCode.INVALID_INPUT
    message = "Invalid input"
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(AppError):
    """Exception raised when a request carries no valid API key."""

    error_code = ErrorCode.UNAUTHENTICATED
    message = "Missing or invalid API key"
    status_code = status.HTTP_401_UNAUTHORIZED


class UnauthorizedError(AppError):
    """Exception raised when the caller lacks permission on a resource."""

    error_code = ErrorCode.UNAUTHORIZED
    message = ErrorNames.UNAUTHORIZED
    status_code = status.HTTP_403_FORBIDDEN
