"""Environment repository."""

from collections.abc import Sequence

from loguru import logger
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from .exceptions import EnvironmentNotFoundError
from .models import Environment, EnvironmentService, Project

__all__ = [
    "get_environment_by_id_db",
    "get_environment_or_raise_db",
    "get_environment_perms_db",
    "get_environments_by_ids_db",
    "get_service_names_db",
]


async def get_environment_by_id_db(
    db: AsyncSession, environment_id: int
) -> Environment | None:
    """Load a single environment that has not been deleted.

    Args:
        db: Database session instance.
        environment_id: ID of the environment.

    Returns:
        The environment, or None if it does not exist or was deleted.
    """
    statement = select(Environment).where(
        Environment.id == environment_id, col(Environment.deleted).is_(None)
    )

    result = await db.exec(statement)
    environment = result.first()

    logger.debug(
        "Environment loaded from DB",
        environment_id=environment_id,
        found=environment is not None,
    )
    return environment


async def get_environment_or_raise_db(
    db: AsyncSession, environment_id: int
) -> Environment:
    """Load an environment that must exist.

    Raises:
        EnvironmentNotFoundError: If the environment is missing or deleted.
    """
    environment = await get_environment_by_id_db(db, environment_id)
    if environment is None:
        raise EnvironmentNotFoundError(environment_id)
    return environment


async def get_environment_perms_db(
    db: AsyncSession, environment_id: int | None
) -> tuple[int, int] | None:
    """Look up the project and customer owning an environment.

    Args:
        db: Database session instance.
        environment_id: ID of the environment.

    Returns:
        ``(project_id, customer_id)``, or None if the environment is unknown.
    """
    statement = (
        select(Project.id, Project.customer)
        .join(Environment, col(Environment.project) == col(Project.id))
        .where(Environment.id == environment_id)
    )
    result = await db.exec(statement)
    row = result.first()
    return (row[0], row[1]) if row is not None else None


async def get_environments_by_ids_db(
    db: AsyncSession, environment_ids: Sequence[int]
) -> Sequence[Environment]:
    """Load several environments at once."""
    statement = select(Environment).where(col(Environment.id).in_(environment_ids))
    result = await db.exec(statement)
    return result.all()


async def get_service_names_db(db: AsyncSession, environment_id: int) -> set[str]:
    """Return the names of the services running in an environment."""
    statement = select(EnvironmentService.name).where(
        EnvironmentService.environment == environment_id
    )
    result = await db.exec(statement)
    return set(result.all())
