"""Exceptions for task operations."""

from taskhub.common.exceptions import InvalidInputError, NotFoundError
from taskhub.config.errors import ErrorNames

__all__ = ["InvalidPatchError", "TaskNotFoundError"]


class TaskNotFoundError(NotFoundError):
    """Exception raised when the task is not found."""

    def __init__(self, task_id: int) -> None:
        """Initialize with the task ID."""
        super().__init__(f"Task with ID {task_id} not found")


class InvalidPatchError(InvalidInputError):
    """Exception raised when an update patch sets no field."""

    message = ErrorNames.EMPTY_PATCH
