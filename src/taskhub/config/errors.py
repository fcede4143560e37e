"""Text constants for consistent error handling."""

from enum import StrEnum

__all__ = ["ErrorCode", "ErrorNames"]


class ErrorCode(StrEnum):
    """Error codes for standardized error handling."""

    # General errors
    SERVER_ERROR = "SERVER_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"

    # Auth errors
    UNAUTHENTICATED = "UNAUTHENTICATED"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Environment errors
    ENVIRONMENT_NOT_FOUND = "ENVIRONMENT_NOT_FOUND"
    MISSING_SERVICE = "MISSING_SERVICE"
    PROJECT_MISMATCH = "PROJECT_MISMATCH"


class ErrorNames(StrEnum):
    """Error names for standardized error handling."""

    INTERNAL_SERVER_ERROR = "Internal server error"
    UNAUTHORIZED = "Unauthorized."
    EMPTY_PATCH = "Input patch requires at least 1 attribute"
    ENVIRONMENT_MISSING = "Environment ID {environment_id} doesn't exist."
    ENVIRONMENT_NO_ACCESS = "No access to environment {environment_id}."
    ENVIRONMENT_NO_SERVICE = "Environment {environment_id} has no service {service}."
    PROJECT_MISMATCH = "Environments do not belong to the same project."
