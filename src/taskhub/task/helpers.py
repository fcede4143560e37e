"""Task creation shared by the add and dispatch resolvers."""

from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from .models import Task, TaskCreate
from .repository import save_task_db
from .tasks import execute_task_bg

__all__ = ["add_task_helper"]


async def add_task_helper(db: AsyncSession, task_data: TaskCreate) -> Task:
    """Persist a task and dispatch it when ``execute`` is set.

    Unset optional fields fall back to the column defaults, so ``created``
    becomes the insert time and ``status`` becomes ``active``.

    Args:
        db: Database session instance.
        task_data: Fields of the new task.

    Returns:
        The persisted task.
    """
    task = Task(**task_data.model_dump(exclude_none=True))
    task = await save_task_db(db, task)

    if task.execute:
        execute_task_bg.send(task.id)
        logger.info("Task dispatched", task_id=task.id, service=task.service)
    else:
        logger.info("Task stored without dispatch", task_id=task.id)

    return task
