"""Background actor that hands dispatched tasks to execution."""

import dramatiq
from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.config.broker import broker
from taskhub.config.config import settings
from taskhub.config.db import engine

from .repository import start_task_db

__all__ = ["execute_task_bg"]


@dramatiq.actor(broker=broker, queue_name=settings.task_queue_name, max_retries=1)
async def execute_task_bg(task_id: int) -> None:
    """Mark a dispatched task as running.

    Tasks deleted before the message is consumed are skipped.

    Args:
        task_id: ID of the task to start.
    """
    async with AsyncSession(engine, expire_on_commit=False) as db:
        try:
            task = await start_task_db(db, task_id)
            if task is None:
                logger.warning("Dispatched task vanished", task_id=task_id)
                return

            logger.info(
                "Task started", task_id=task_id, environment=task.environment
            )

        except Exception:
            await db.rollback()
            logger.exception("Error in task execution actor", task_id=task_id)
            raise
