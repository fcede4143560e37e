"""Credentials repository."""

from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.common.exceptions import UnauthenticatedError

from .credentials import Credentials
from .models import ApiUser, CustomerUser, ProjectUser

__all__ = ["get_credentials_db"]


async def get_credentials_db(db: AsyncSession, api_key: str) -> Credentials:
    """Build the credentials of the user owning an API key.

    Args:
        db: Database session instance.
        api_key: Bearer key presented by the caller.

    Returns:
        Credentials with the user's role and customer/project memberships.

    Raises:
        UnauthenticatedError: If no user owns the key.
    """
    result = await db.exec(select(ApiUser).where(ApiUser.api_key == api_key))
    user = result.first()
    if user is None:
        raise UnauthenticatedError()

    customers = await db.exec(
        select(CustomerUser.customer).where(CustomerUser.user == user.id)
    )
    projects = await db.exec(
        select(ProjectUser.project).where(ProjectUser.user == user.id)
    )

    credentials = Credentials(
        role=user.role,
        customers=frozenset(customers.all()),
        projects=frozenset(projects.all()),
    )
    logger.debug("Credentials loaded from DB", user_id=user.id, role=user.role)
    return credentials
