"""Router Initializer."""

from fastapi import FastAPI

from taskhub.common.router import router as common_router
from taskhub.config.config import settings
from taskhub.gql.schema import graphql_router


def register_routers(app: FastAPI) -> None:
    """Register all API routers with the FastAPI application.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(common_router)
    app.include_router(graphql_router, prefix=settings.graphql_path)
