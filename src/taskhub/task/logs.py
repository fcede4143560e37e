"""Attach reported log output to tasks."""

from sqlmodel.ext.asyncio.session import AsyncSession

from .models import Task, TaskPublic
from .repository import get_latest_log_db

__all__ = ["inject_logs"]


async def inject_logs(db: AsyncSession, task: Task) -> TaskPublic:
    """Convert a task row to its public form with ``logs`` filled in.

    The logs are the newest output reported for the task's remote ID in its
    current status. Tasks that were never picked up by the remote system have
    no remote ID and therefore no logs.
    """
    public = TaskPublic.model_validate(task)
    if not task.remote_id:
        return public

    logs = await get_latest_log_db(db, task.remote_id, task.status)
    return public.model_copy(update={"logs": logs})
