"""Environment exceptions."""

from fastapi import status

from taskhub.common.app_error import AppError
from taskhub.config.errors import ErrorCode, ErrorNames

__all__ = [
    "EnvironmentAccessError",
    "EnvironmentNotFoundError",
    "MissingServiceError",
    "ProjectMismatchError",
]


class EnvironmentNotFoundError(AppError):
    """Exception raised when an environment does not exist or was deleted."""

    error_code = ErrorCode.ENVIRONMENT_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, environment_id: int) -> None:
        """Initialize with the environment ID."""
        super().__init__(
            ErrorNames.ENVIRONMENT_MISSING.format(environment_id=environment_id)
        )


class EnvironmentAccessError(AppError):
    """Exception raised when the caller may not act on an environment."""

    error_code = ErrorCode.UNAUTHORIZED
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, environment_id: int | None) -> None:
        """Initialize with the environment ID."""
        super().__init__(
            ErrorNames.ENVIRONMENT_NO_ACCESS.format(environment_id=environment_id)
        )


class MissingServiceError(AppError):
    """Exception raised when an environment does not run a required service."""

    error_code = ErrorCode.MISSING_SERVICE
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, environment_id: int, service: str) -> None:
        """Initialize with the environment ID and the missing service."""
        super().__init__(
            ErrorNames.ENVIRONMENT_NO_SERVICE.format(
                environment_id=environment_id, service=service
            )
        )


class ProjectMismatchError(AppError):
    """Exception raised when environments span more than one project."""

    error_code = ErrorCode.PROJECT_MISMATCH
    message = ErrorNames.PROJECT_MISMATCH
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
