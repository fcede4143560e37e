"""Loguru setup.

Outside production logs go to a rotating file and a colored stdout sink.
Production writes plain lines to stderr, pushes structured records to Loki and
routes stdlib loggers (uvicorn, sqlalchemy, dramatiq) through loguru.
"""

import logging
import sys
from collections.abc import Mapping
from typing import Any, Final

from loguru import logger
from loki_logger_handler.formatters.loguru_formatter import LoguruFormatter
from loki_logger_handler.loki_logger_handler import LokiLoggerHandler

from .config import settings

__all__ = ["config_logger"]


_LOKI_URL: Final = "http://alloy:9999/loki/api/v1/push"  # NOSONAR


def config_logger() -> None:
    """Replace loguru's default sink with the sinks of the current environment."""
    logger.remove()

    if settings.app_env == "production":
        _route_stdlib_to_loguru()
        logger.add(
            sys.stderr,
            format=_plain_format,
            level=settings.log_level,
            enqueue=True,
            colorize=False,
        )
        logger.add(
            LokiLoggerHandler(
                url=_LOKI_URL,
                labels={
                    "application": "taskhub",
                    "environment": settings.app_env,
                    "version": settings.version,
                },
                timeout=5,
                enable_structured_loki_metadata=True,
                default_formatter=LoguruFormatter(),  # type: ignore[arg-type]
            ),
            serialize=True,
            enqueue=True,
            level=settings.log_level,
        )
        return

    logger.add(
        settings.log_path,
        format=_plain_format,
        level=logging.DEBUG,
        rotation=settings.rotation,
        compression="zip",
        enqueue=True,
        colorize=False,
    )
    logger.add(
        sys.stdout,
        format=_colored_format,
        level=settings.log_level,
        enqueue=True,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )


def _route_stdlib_to_loguru() -> None:
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.log_level)

    for name in list(logging.root.manager.loggerDict):
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = []
        stdlib_logger.propagate = True


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D102
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _plain_format(record: Mapping[str, Any]) -> str:
    ts = record["time"].strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    head = f"{ts} | {record['level'].name:<8} | {record['name']}:{record['line']}"
    return f"{head} - {{message}}{_extras(record)}\n{{exception}}"


def _colored_format(record: Mapping[str, Any]) -> str:
    ts = record["time"].strftime("%H:%M:%S.%f")[:-3]
    where = f"{record['name']}:{record['function']}:{record['line']}"
    head = (
        f"<green>{ts}</green> | <level>{record['level'].name:<8}</level> | "
        f"<cyan>{where}</cyan>"
    )
    return f"{head} - <level>{{message}}</level>{_extras(record)}\n{{exception}}"


def _extras(record: Mapping[str, Any]) -> str:
    """Render bound structured fields as `` | key=value`` pairs."""
    if not record["extra"]:
        return ""
    pairs = (f"{key}={_escape(value)}" for key, value in record["extra"].items())
    return " | " + " | ".join(pairs)


def _escape(value: Any) -> str:  # noqa: ANN401
    """Keep extra values from being read as format fields or color tags."""
    return str(value).replace("{", "{{").replace("}", "}}").replace("<", r"\<")
