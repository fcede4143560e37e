"""Per-request GraphQL context carrying the session and caller credentials."""

from typing import Annotated

from fastapi import Depends, Header
from sqlmodel.ext.asyncio.session import AsyncSession
from strawberry.fastapi import BaseContext

from taskhub.auth.credentials import Credentials
from taskhub.auth.repository import get_credentials_db
from taskhub.common.exceptions import UnauthenticatedError
from taskhub.config.db import get_session

__all__ = ["TaskhubContext", "get_context"]


_BEARER_PREFIX = "bearer "


class TaskhubContext(BaseContext):
    """Context handed to every resolver."""

    def __init__(self, db: AsyncSession, credentials: Credentials | None) -> None:
        """Initialize with the request's session and resolved credentials."""
        super().__init__()
        self.db = db
        self.credentials = credentials

    def require_credentials(self) -> Credentials:
        """Return the caller's credentials.

        Raises:
            UnauthenticatedError: If the request carried no API key.
        """
        if self.credentials is None:
            raise UnauthenticatedError()
        return self.credentials


async def get_context(
    db: Annotated[AsyncSession, Depends(get_session)],
    authorization: Annotated[str | None, Header()] = None,
) -> TaskhubContext:
    """Resolve the caller from the ``Authorization: Bearer <key>`` header.

    Requests without the header get a context without credentials so the
    GraphQL IDE can load; every resolver then rejects them.

    Raises:
        UnauthenticatedError: If the header is malformed or the key unknown.
    """
    if authorization is None:
        return TaskhubContext(db, None)

    if not authorization.lower().startswith(_BEARER_PREFIX):
        raise UnauthenticatedError("Authorization header must use the Bearer scheme")

    api_key = authorization[len(_BEARER_PREFIX) :].strip()
    credentials = await get_credentials_db(db, api_key)
    return TaskhubContext(db, credentials)
