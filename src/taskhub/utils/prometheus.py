"""Prometheus metrics for tracking custom metrics."""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from prometheus_client import Counter, Gauge

from taskhub.config.config import settings

__all__ = ["add_prometheus_metrics"]


REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress_total",
    "Active HTTP requests",
    ["method", "path"],
)

GRAPHQL_REQUESTS = Counter(
    "graphql_requests_total",
    "GraphQL requests by HTTP status",
    ["status"],
)


def add_prometheus_metrics(app: FastAPI) -> None:
    """Track in-flight HTTP requests and completed GraphQL requests.

    Args:
        app: The FastAPI application instance where the middleware will be added.
    """

    @app.middleware("http")
    async def track_in_flight(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        path = request.url.path
        REQUESTS_IN_PROGRESS.labels(request.method, path).inc()
        try:
            response = await call_next(request)
        finally:
            REQUESTS_IN_PROGRESS.labels(request.method, path).dec()

        if path.startswith(settings.graphql_path):
            GRAPHQL_REQUESTS.labels(str(response.status_code)).inc()
        return response
