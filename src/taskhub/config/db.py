"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any, Final

from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from .config import Settings, settings

__all__ = ["engine", "engine_options", "get_session"]


def engine_options(config: Settings) -> dict[str, Any]:
    """Build ``create_async_engine`` keyword arguments for the configured URL.

    SQLite specific connect arguments are only passed for ``sqlite`` URLs, so
    ``DATABASE_URL`` may point at any async driver.
    """
    options: dict[str, Any] = {
        "echo": config.db_logging,
        "pool_timeout": config.db_pool_timeout,
        "pool_size": config.db_pool_size,
        "max_overflow": config.db_max_overflow,
        "pool_recycle": config.db_pool_recycle,
        "pool_pre_ping": config.db_pool_pre_ping,
    }
    if config.db_url.startswith("sqlite"):
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": config.db_timeout,
        }
    return options


engine: Final = create_async_engine(settings.db_url, **engine_options(settings))


async def get_session() -> AsyncGenerator[AsyncSession]:
    """Yield a session that commits on success and rolls back on error."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
