"""Task status values and normalization of API status input."""

from enum import StrEnum
from typing import Final

__all__ = ["TaskStatus", "normalize_task_status"]


class TaskStatus(StrEnum):
    """Known lifecycle states of a task."""

    ACTIVE = "active"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# API enum name -> stored value, e.g. "ACTIVE" -> "active"
_STATUS_BY_TYPE: Final[dict[str, str]] = {
    status.name: status.value for status in TaskStatus
}


def normalize_task_status(status: str | None) -> str | None:
    """Map an API status to its stored form.

    ``ACTIVE``, ``SUCCEEDED`` and ``FAILED`` become lowercase. Any other value,
    including ``None``, is returned unchanged.
    """
    if status is None:
        return None
    return _STATUS_BY_TYPE.get(status, status)
