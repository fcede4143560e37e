"""GraphQL API for tasks, built with strawberry and served through FastAPI."""

from .context import TaskhubContext, get_context
from .schema import TaskhubSchema, graphql_router, schema

__all__ = ["TaskhubContext", "TaskhubSchema", "get_context", "graphql_router", "schema"]
