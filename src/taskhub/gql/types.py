"""GraphQL object and input types for tasks."""

from datetime import datetime
from enum import Enum
from typing import Any

import strawberry

from taskhub.task.models import TaskCreate, TaskPatch, TaskPublic

__all__ = [
    "DeleteTaskInput",
    "TaskInput",
    "TaskStatusType",
    "TaskType",
    "UpdateTaskInput",
    "UpdateTaskPatchInput",
]


@strawberry.enum(description="Status of a task as accepted on input.")
class TaskStatusType(Enum):
    ACTIVE = "ACTIVE"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@strawberry.type(name="Task", description="A command dispatched to an environment.")
class TaskType:
    id: int
    name: str
    status: str
    created: datetime | None
    started: datetime | None
    completed: datetime | None
    environment: int
    service: str | None
    command: str | None
    remote_id: str | None
    execute: bool
    logs: str | None

    @classmethod
    def from_public(cls, task: TaskPublic) -> "TaskType":
        """Convert a service-layer task."""
        return cls(**task.model_dump())


@strawberry.input(description="Fields of a new task.")
class TaskInput:
    name: str
    environment: int
    id: int | None = None
    status: TaskStatusType | None = None
    created: datetime | None = None
    started: datetime | None = None
    completed: datetime | None = None
    service: str | None = None
    command: str | None = None
    remote_id: str | None = None
    execute: bool | None = None

    def to_create(self) -> TaskCreate:
        """Convert to the service-layer model; omitted fields keep defaults."""
        return TaskCreate(**_set_fields(self))


@strawberry.input
class DeleteTaskInput:
    id: int


@strawberry.input(description="Task fields to change; omitted fields stay as is.")
class UpdateTaskPatchInput:
    name: str | None = None
    status: TaskStatusType | None = None
    created: datetime | None = None
    started: datetime | None = None
    completed: datetime | None = None
    environment: int | None = None
    service: str | None = None
    command: str | None = None
    remote_id: str | None = None

    def to_patch(self) -> TaskPatch:
        """Convert to the service-layer patch with only the given fields set."""
        return TaskPatch(**_set_fields(self))


@strawberry.input
class UpdateTaskInput:
    id: int
    patch: UpdateTaskPatchInput


def _set_fields(obj: object) -> dict[str, Any]:
    """Collect the non-null fields of an input, unwrapping status enums."""
    fields: dict[str, Any] = {}
    for key, value in vars(obj).items():
        if value is None or value is strawberry.UNSET:
            continue
        fields[key] = value.value if isinstance(value, TaskStatusType) else value
    return fields
