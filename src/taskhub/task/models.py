"""Task models."""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel, func

from .task_status import TaskStatus

__all__ = ["Task", "TaskCreate", "TaskLog", "TaskPatch", "TaskPublic"]


class _TaskBase(SQLModel):
    """Fields shared by task input and output models."""

    name: str = Field(description="Human readable name of the task.")

    environment: int = Field(description="ID of the environment the task runs on.")

    service: str | None = Field(
        default=None, description="Service (container) the command runs in."
    )

    command: str | None = Field(default=None, description="Shell command to run.")

    remote_id: str | None = Field(
        default=None, description="ID of the task in the remote execution system."
    )

    started: datetime | None = Field(
        default=None, description="Timestamp when the task started running."
    )

    completed: datetime | None = Field(
        default=None, description="Timestamp when the task finished."
    )


class TaskCreate(_TaskBase):
    """Task creation model."""

    id: int | None = Field(default=None, description="Explicit ID for the task.")

    status: str | None = Field(default=None, description="Initial status.")

    created: datetime | None = Field(
        default=None, description="Creation timestamp, defaults to now."
    )

    execute: bool = Field(
        default=True, description="Dispatch the task for execution after creation."
    )


class TaskPatch(SQLModel):
    """Partial task update; only fields explicitly set are applied."""

    name: str | None = None
    status: str | None = None
    created: datetime | None = None
    started: datetime | None = None
    completed: datetime | None = None
    environment: int | None = None
    service: str | None = None
    command: str | None = None
    remote_id: str | None = None


class TaskPublic(_TaskBase):
    """Task as returned to API callers, enriched with its log output."""

    id: int
    status: str
    created: datetime | None = None
    execute: bool
    logs: str | None = Field(
        default=None, description="Latest log output reported for the task."
    )


class Task(SQLModel, table=True):
    """Task model."""

    __tablename__ = "task"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(description="Human readable name of the task.")

    status: str = Field(
        default=TaskStatus.ACTIVE.value,
        index=True,
        description="Current status of the task.",
    )

    created: datetime = Field(
        sa_column=Column(DateTime(timezone=True), insert_default=func.now()),
        description="Timestamp when the task was created.",
    )

    started: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Timestamp when the task started running.",
    )

    completed: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Timestamp when the task finished.",
    )

    environment: int = Field(
        foreign_key="environment.id",
        index=True,
        description="ID of the environment the task runs on.",
    )

    service: str | None = Field(default=None, description="Target service.")

    command: str | None = Field(default=None, description="Shell command to run.")

    remote_id: str | None = Field(
        default=None,
        index=True,
        description="ID of the task in the remote execution system.",
    )

    execute: bool = Field(
        default=True, description="Whether the task was dispatched for execution."
    )


class TaskLog(SQLModel, table=True):
    """Log output reported by the remote execution system for a task run."""

    __tablename__ = "task_log"

    id: int | None = Field(default=None, primary_key=True)

    remote_id: str = Field(index=True, description="Remote ID of the task run.")

    status: str = Field(description="Task status the log output belongs to.")

    message: str = Field(description="Log output.")

    created: datetime = Field(
        sa_column=Column(DateTime(timezone=True), insert_default=func.now()),
        description="Timestamp when the log output was received.",
    )
