"""FastAPI application serving the Taskhub GraphQL API."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Final

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from prometheus_fastapi_instrumentator import Instrumentator
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.config import config_logger, engine, seed_db, settings
from taskhub.config.security import add_security_headers
from taskhub.utils.banner import create_banner
from taskhub.utils.error_handler import register_exception_handlers
from taskhub.utils.prometheus import add_prometheus_metrics
from taskhub.utils.routers import register_routers

config_logger()


async def _prepare_database() -> None:
    """Create the schema and optionally reset and seed it."""
    async with engine.begin() as conn:
        if settings.clear_db_on_restart:
            logger.warning("Dropping all tables", db=settings.db_url.split("://")[0])
            await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    if settings.seed_db_on_start:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            await seed_db(session)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None]:
    """Prepare the database before serving and release the pool afterwards."""
    create_banner(settings)
    await _prepare_database()
    logger.info("Taskhub ready", graphql_path=settings.graphql_path)

    yield

    await engine.dispose()
    logger.info("Taskhub stopped")


app: Final = FastAPI(
    title="Taskhub",
    description="GraphQL API for creating, dispatching and tracking environment tasks",
    root_path=settings.root_path,
    version=settings.version,
    lifespan=lifespan,
)

# Metrics
Instrumentator(excluded_handlers=["/metrics", "/health"]).instrument(app).expose(
    app, include_in_schema=False
)
add_prometheus_metrics(app)

# Middleware
add_security_headers(app)
if settings.app_env != "production":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origin_in_dev,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

# Routes and error handling
register_routers(app)
register_exception_handlers(app)
