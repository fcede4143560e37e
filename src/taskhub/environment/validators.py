"""Precondition checks on environments shared by the task resolvers.

Each validator returns nothing on success and raises an ``AppError`` subclass
describing the failed precondition otherwise.
"""

from collections.abc import Sequence

from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.auth.credentials import Credentials, has_permission

from .exceptions import (
    EnvironmentAccessError,
    EnvironmentNotFoundError,
    MissingServiceError,
    ProjectMismatchError,
)
from .repository import (
    get_environment_by_id_db,
    get_environment_perms_db,
    get_environments_by_ids_db,
    get_service_names_db,
)

__all__ = [
    "environment_exists",
    "environment_has_service",
    "environments_have_same_project",
    "user_access_environment",
]


async def environment_exists(db: AsyncSession, environment_id: int) -> None:
    """Ensure an environment exists and is not deleted.

    Raises:
        EnvironmentNotFoundError: If it does not.
    """
    if await get_environment_by_id_db(db, environment_id) is None:
        raise EnvironmentNotFoundError(environment_id)


async def user_access_environment(
    db: AsyncSession, credentials: Credentials, environment_id: int | None
) -> None:
    """Ensure the caller may act on an environment.

    Admins always pass. Other callers need the environment's project or the
    project's customer in their permitted sets.

    Raises:
        EnvironmentAccessError: If the caller has no access.
    """
    if credentials.is_admin:
        return

    perms = await get_environment_perms_db(db, environment_id)
    project_id, customer_id = perms if perms is not None else (None, None)

    if not has_permission(credentials, project_id, customer_id):
        logger.warning(
            "Environment access denied",
            environment_id=environment_id,
            project_id=project_id,
        )
        raise EnvironmentAccessError(environment_id)


async def environment_has_service(
    db: AsyncSession, environment_id: int, service: str
) -> None:
    """Ensure a service runs in an environment.

    Raises:
        MissingServiceError: If the service is absent.
    """
    if service not in await get_service_names_db(db, environment_id):
        raise MissingServiceError(environment_id, service)


async def environments_have_same_project(
    db: AsyncSession, environment_ids: Sequence[int]
) -> None:
    """Ensure all given environments belong to one project.

    Raises:
        ProjectMismatchError: If they span several projects.
    """
    environments = await get_environments_by_ids_db(db, environment_ids)
    if len({env.project for env in environments}) > 1:
        raise ProjectMismatchError()
