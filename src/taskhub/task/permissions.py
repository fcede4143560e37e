"""Task access checks."""

from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.auth.credentials import Credentials, has_permission
from taskhub.common.exceptions import UnauthorizedError

from .repository import get_task_perms_db

__all__ = ["authorize_task_access"]


async def authorize_task_access(
    db: AsyncSession, credentials: Credentials, task_id: int
) -> None:
    """Ensure the caller may read or change a task.

    Admins always pass. Other callers need the project of the task's
    environment, or that project's customer, in their permitted sets. Unknown
    tasks are denied to non-admins.

    Raises:
        UnauthorizedError: If the caller has no access.
    """
    if credentials.is_admin:
        return

    project_id, customer_id = await get_task_perms_db(db, task_id)
    if not has_permission(credentials, project_id, customer_id):
        logger.warning("Task access denied", task_id=task_id, project_id=project_id)
        raise UnauthorizedError()
