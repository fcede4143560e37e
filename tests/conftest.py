"""Common test fixtures for the application."""

import os

os.environ.setdefault("ENV", "testing")
os.environ.setdefault("SEED_DB_ON_START", "false")

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.app import app
from taskhub.auth.credentials import Credentials
from taskhub.auth.role import Role
from taskhub.config.broker import broker
from taskhub.config.db import get_session
from taskhub.config.seed import (
    ADMIN_API_KEY,
    CUSTOMER_ACME_ID,
    PROJECT_BLOG_ID,
    seed_db,
)

GraphQLCall = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture(autouse=True)
def flush_broker() -> Generator[None]:
    """Drop messages enqueued on the stub broker by earlier tests."""
    broker.flush_all()
    yield
    broker.flush_all()


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    """Create a seeded in-memory database for a single test.

    Returns:
        AsyncSession: SQLModel async session for database operations.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(test_engine, expire_on_commit=False) as session:
        await seed_db(session)
        yield session

    await test_engine.dispose()


@pytest.fixture
def admin() -> Credentials:
    """Credentials of an admin."""
    return Credentials(role=Role.ADMIN)


@pytest.fixture
def acme_user() -> Credentials:
    """Credentials of a user permitted on every project of customer Acme."""
    return Credentials(role=Role.NONE, customers=frozenset({CUSTOMER_ACME_ID}))


@pytest.fixture
def blog_user() -> Credentials:
    """Credentials of a user permitted on the blog project only."""
    return Credentials(role=Role.NONE, projects=frozenset({PROJECT_BLOG_ID}))


@pytest.fixture
def nobody() -> Credentials:
    """Credentials of a user without any permission."""
    return Credentials(role=Role.NONE)


@pytest.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Create an HTTP client for the FastAPI app bound to the test session.

    Args:
        session: Database session fixture.

    Returns:
        AsyncClient: Client sending requests straight to the ASGI app.
    """

    def get_session_override() -> AsyncSession:
        return session

    app.dependency_overrides[get_session] = get_session_override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def graphql(client: AsyncClient) -> GraphQLCall:
    """Post a GraphQL operation and return the decoded response body.

    The admin API key is sent unless another key is given; pass ``api_key=None``
    to send no ``Authorization`` header at all.
    """

    async def _call(
        query: str,
        variables: dict[str, Any] | None = None,
        api_key: str | None = ADMIN_API_KEY,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        response = await client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        return response.json()

    return _call
