"""Tasks repository."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.auth.credentials import Credentials

from .models import Task
from .query_builder import (
    delete_task_stmt,
    select_latest_log,
    select_perms_for_task,
    select_task,
    select_task_by_remote_id,
    select_tasks_by_environment,
    update_task_stmt,
)
from .task_status import TaskStatus

__all__ = [
    "delete_task_db",
    "get_latest_log_db",
    "get_task_by_id_db",
    "get_task_by_remote_id_db",
    "get_task_perms_db",
    "get_tasks_by_environment_db",
    "save_task_db",
    "start_task_db",
    "update_task_db",
]


async def get_tasks_by_environment_db(
    db: AsyncSession, environment_id: int, credentials: Credentials
) -> Sequence[Task]:
    """Retrieve the tasks of an environment visible to the caller.

    Args:
        db: Database session for executing queries.
        environment_id: ID of the environment.
        credentials: Caller credentials used to scope the rows.

    Returns:
        Sequence of tasks ordered by ID.
    """
    result = await db.exec(select_tasks_by_environment(environment_id, credentials))
    tasks = result.all()
    logger.debug(
        "Tasks fetched from DB", environment_id=environment_id, count=len(tasks)
    )
    return tasks


async def get_task_by_id_db(db: AsyncSession, task_id: int) -> Task | None:
    """Load a task by ID, None if it does not exist."""
    result = await db.exec(select_task(task_id))
    return result.first()


async def get_task_by_remote_id_db(db: AsyncSession, remote_id: str) -> Task | None:
    """Load the first task carrying a remote ID, None if there is none."""
    result = await db.exec(select_task_by_remote_id(remote_id))
    task = result.first()
    logger.debug("Task looked up by remote ID", remote_id=remote_id, found=bool(task))
    return task


async def get_task_perms_db(
    db: AsyncSession, task_id: int
) -> tuple[int | None, int | None]:
    """Look up the project and customer owning a task.

    Returns:
        ``(project_id, customer_id)``; both None if the task is unknown.
    """
    result = await db.exec(select_perms_for_task(task_id))
    row = result.first()
    if row is None:
        return None, None
    return row.pid, row.cid


async def get_latest_log_db(
    db: AsyncSession, remote_id: str, status: str
) -> str | None:
    """Return the newest log message of a task run, None if nothing was logged."""
    result = await db.exec(select_latest_log(remote_id, status))
    return result.first()


async def save_task_db(db: AsyncSession, task: Task) -> Task:
    """Persist a new task.

    Args:
        db: Database session instance.
        task: The task to save.

    Returns:
        The saved task with its assigned ID and timestamps.
    """
    db.add(task)
    await db.commit()
    await db.refresh(task)

    logger.debug("Task saved to DB", task_id=task.id, environment=task.environment)
    return task


async def update_task_db(db: AsyncSession, task_id: int, values: dict[str, Any]) -> None:
    """Apply a set of column values to a task."""
    await db.exec(update_task_stmt(task_id, values))  # type: ignore[call-overload]
    await db.commit()
    logger.debug("Task updated", task_id=task_id, fields=sorted(values))


async def delete_task_db(db: AsyncSession, task_id: int) -> None:
    """Delete a task by ID; deleting a missing task is a no-op."""
    await db.exec(delete_task_stmt(task_id))  # type: ignore[call-overload]
    await db.commit()
    logger.debug("Task deleted", task_id=task_id)


async def start_task_db(db: AsyncSession, task_id: int) -> Task | None:
    """Mark a task as running.

    Sets the status to ``active`` and stamps ``started`` with the current time.

    Returns:
        The updated task, or None if it no longer exists.
    """
    task = await db.get(Task, task_id)
    if task is None:
        return None

    task.status = TaskStatus.ACTIVE.value
    task.started = datetime.now(tz=UTC)
    await db.commit()
    await db.refresh(task)

    logger.debug("Task marked as started", task_id=task_id)
    return task
