"""Task service.

Each function implements one task query or mutation of the API. They all take
the caller's credentials explicitly and follow the same shape: authorize,
validate preconditions, run a single write or read, then attach logs.
Validation and the write are not wrapped in a common transaction.
"""

from typing import Final, Literal

from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.auth.credentials import Credentials
from taskhub.environment.models import Environment
from taskhub.environment.repository import get_environment_or_raise_db
from taskhub.environment.validators import (
    environment_exists,
    environment_has_service,
    environments_have_same_project,
    user_access_environment,
)

from .drush import CLI_SERVICE, archive_dump_task, rsync_files_task, sql_sync_task
from .exceptions import InvalidPatchError, TaskNotFoundError
from .helpers import add_task_helper
from .logs import inject_logs
from .models import TaskCreate, TaskPatch, TaskPublic
from .permissions import authorize_task_access
from .repository import (
    delete_task_db,
    get_task_by_id_db,
    get_task_by_remote_id_db,
    get_tasks_by_environment_db,
    update_task_db,
)
from .task_status import normalize_task_status

__all__ = [
    "DELETE_SUCCESS",
    "add_task_svc",
    "delete_task_svc",
    "get_task_by_remote_id_svc",
    "get_tasks_by_environment_id_svc",
    "task_drush_archive_dump_svc",
    "task_drush_rsync_files_svc",
    "task_drush_sql_sync_svc",
    "update_task_svc",
]


DELETE_SUCCESS: Final = "success"


async def get_tasks_by_environment_id_svc(
    db: AsyncSession, credentials: Credentials, environment_id: int
) -> list[TaskPublic]:
    """List the tasks of an environment visible to the caller.

    Non-admins get an empty list for environments outside their permitted
    customers and projects.
    """
    tasks = await get_tasks_by_environment_db(db, environment_id, credentials)
    return [await inject_logs(db, task) for task in tasks]


async def get_task_by_remote_id_svc(
    db: AsyncSession, credentials: Credentials, remote_id: str
) -> TaskPublic | None:
    """Look up a task by the ID the remote execution system assigned to it.

    Returns:
        The task, or None if no task carries the remote ID.

    Raises:
        UnauthorizedError: If a non-admin caller may not see the task.
    """
    task = await get_task_by_remote_id_db(db, remote_id)
    if task is None or task.id is None:
        return None

    await authorize_task_access(db, credentials, task.id)
    return await inject_logs(db, task)


async def add_task_svc(
    db: AsyncSession, credentials: Credentials, task_input: TaskCreate
) -> TaskPublic:
    """Create a task on an environment the caller can access.

    The status is normalized and non-admin callers always get ``execute``
    set, so only admins can store a task without dispatching it.

    Raises:
        EnvironmentNotFoundError: If the environment does not exist.
        EnvironmentAccessError: If the caller may not access it.
    """
    status = normalize_task_status(task_input.status)
    execute = task_input.execute if credentials.is_admin else True

    await environment_exists(db, task_input.environment)
    await user_access_environment(db, credentials, task_input.environment)

    task = await add_task_helper(
        db, task_input.model_copy(update={"status": status, "execute": execute})
    )
    logger.info("Task added", task_id=task.id, environment=task.environment)
    return await inject_logs(db, task)


async def delete_task_svc(
    db: AsyncSession, credentials: Credentials, task_id: int
) -> Literal["success"]:
    """Delete a task.

    Raises:
        UnauthorizedError: If a non-admin caller may not change the task.
    """
    await authorize_task_access(db, credentials, task_id)
    await delete_task_db(db, task_id)
    logger.info("Task deleted", task_id=task_id)
    return DELETE_SUCCESS


async def update_task_svc(
    db: AsyncSession, credentials: Credentials, task_id: int, patch: TaskPatch
) -> TaskPublic:
    """Apply a partial update to a task and return the stored result.

    Only fields set to a non-null value take part in the update. Access is
    checked against the task as it currently stands and, when the patch moves
    the task, against the target environment as well.

    Raises:
        InvalidPatchError: If the patch sets no field.
        UnauthorizedError: If a non-admin caller may not change the task.
        EnvironmentNotFoundError: If the target environment does not exist.
        EnvironmentAccessError: If the caller may not access the target.
        TaskNotFoundError: If the task does not exist.
    """
    values = patch.model_dump(exclude_unset=True, exclude_none=True)
    if not values:
        raise InvalidPatchError()

    await authorize_task_access(db, credentials, task_id)

    if "environment" in values:
        await environment_exists(db, values["environment"])
        await user_access_environment(db, credentials, values["environment"])

    if "status" in values:
        values["status"] = normalize_task_status(values["status"])

    await update_task_db(db, task_id, values)

    task = await get_task_by_id_db(db, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)

    logger.info("Task updated", task_id=task_id, fields=sorted(values))
    return await inject_logs(db, task)


async def task_drush_archive_dump_svc(
    db: AsyncSession, credentials: Credentials, environment_id: int
) -> TaskPublic:
    """Dispatch ``drush archive-dump`` on an environment's cli service."""
    await environment_exists(db, environment_id)
    await user_access_environment(db, credentials, environment_id)
    await environment_has_service(db, environment_id, CLI_SERVICE)

    task = await add_task_helper(db, archive_dump_task(environment_id))
    return await inject_logs(db, task)


async def task_drush_sql_sync_svc(
    db: AsyncSession,
    credentials: Credentials,
    source_environment_id: int,
    destination_environment_id: int,
) -> TaskPublic:
    """Dispatch a database sync from one environment of a project to another."""
    source, destination = await _validate_sync(
        db, credentials, source_environment_id, destination_environment_id
    )

    task = await add_task_helper(db, sql_sync_task(source, destination))
    return await inject_logs(db, task)


async def task_drush_rsync_files_svc(
    db: AsyncSession,
    credentials: Credentials,
    source_environment_id: int,
    destination_environment_id: int,
) -> TaskPublic:
    """Dispatch a files sync from one environment of a project to another."""
    source, destination = await _validate_sync(
        db, credentials, source_environment_id, destination_environment_id
    )

    task = await add_task_helper(db, rsync_files_task(source, destination))
    return await inject_logs(db, task)


async def _validate_sync(
    db: AsyncSession,
    credentials: Credentials,
    source_environment_id: int,
    destination_environment_id: int,
) -> tuple[Environment, Environment]:
    """Run the preconditions shared by both sync resolvers.

    Both environments must exist, belong to the same project and be
    accessible to the caller, and the source must run a cli service.

    Returns:
        The source and destination environments.
    """
    await environment_exists(db, source_environment_id)
    await environment_exists(db, destination_environment_id)
    await environments_have_same_project(
        db, [source_environment_id, destination_environment_id]
    )
    await user_access_environment(db, credentials, source_environment_id)
    await user_access_environment(db, credentials, destination_environment_id)
    await environment_has_service(db, source_environment_id, CLI_SERVICE)

    source = await get_environment_or_raise_db(db, source_environment_id)
    destination = await get_environment_or_raise_db(db, destination_environment_id)
    return source, destination
