"""GraphQL schema and FastAPI router."""

from graphql import GraphQLError
from loguru import logger
from strawberry import Schema
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from taskhub.common.app_error import AppError

from .context import TaskhubContext, get_context
from .resolvers import Mutation, Query

__all__ = ["TaskhubSchema", "graphql_router", "schema"]


class TaskhubSchema(Schema):
    """Schema that logs resolver errors and exposes application error codes."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        """Log each error and copy ``AppError`` codes into its extensions."""
        for error in errors:
            original = error.original_error
            if isinstance(original, AppError):
                error.extensions = {
                    **(error.extensions or {}),
                    "code": str(original.error_code),
                }
                logger.warning(
                    "GraphQL operation failed",
                    code=original.error_code,
                    message=original.message,
                    path=error.path,
                )
            elif original is None:
                logger.info("GraphQL request rejected", message=error.message)
            else:
                logger.opt(exception=original).error(
                    "Unhandled exception in resolver", path=error.path
                )


schema = TaskhubSchema(query=Query, mutation=Mutation)

graphql_router: GraphQLRouter[TaskhubContext, None] = GraphQLRouter(
    schema, context_getter=get_context
)
