"""Global exception handlers for the REST surface."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from taskhub.common.app_error import AppError
from taskhub.config.errors import ErrorCode, ErrorNames

from .error_path import get_error_path

__all__ = ["register_exception_handlers"]


def _make_response(status_code: int, code: ErrorCode, message: str) -> JSONResponse:
    """Return a uniform JSON error shape."""
    return JSONResponse(
        status_code=status_code,
        content={"code": code, "message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the global exception handlers to *app*.

    Errors raised by GraphQL resolvers never reach these handlers; they are
    reported in the GraphQL response instead. These cover the REST routes and
    failures while building the GraphQL context, such as an unknown API key.
    """

    @app.exception_handler(AppError)
    def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        logger.warning(
            "{}: {}", exc.error_code, exc.message, path=request.url.path
        )
        return _make_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(Exception)
    def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(
            "Unhandled exception", origin=get_error_path(exc), path=request.url.path
        )
        return _make_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.SERVER_ERROR,
            ErrorNames.INTERNAL_SERVER_ERROR,
        )
