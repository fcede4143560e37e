"""Application settings.

Defaults come from ``resources/app.toml``; environment variables and a ``.env``
file override them.
"""

import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings"]


_TOML_PATH = Path(__file__).parent / "resources" / "app.toml"

with _TOML_PATH.open("rb") as f:
    _toml: dict[str, Any] = tomllib.load(f).get("app", {})


def _default(section: str, key: str, fallback: Any) -> Any:  # noqa: ANN401
    """Read ``[app.<section>] <key>`` from app.toml."""
    return _toml.get(section, {}).get(key, fallback)


class Settings(BaseSettings):
    """Taskhub configuration."""

    app_env: Literal["development", "testing", "production"] = Field(
        default="development",
        validation_alias="ENV",
        description="Deployment environment; selects broker, logging and CORS.",
    )

    # [app.server]
    host_binding: str = Field(
        default=_default("server", "host_binding", "127.0.0.1"),
        description="Interface uvicorn binds to.",
    )
    port: int = Field(
        default=_default("server", "port", 8000),
        description="Port uvicorn listens on.",
    )
    version: str = Field(
        default=_default("server", "version", "0.1.0"),
        description="Service version reported in OpenAPI and Loki labels.",
    )
    root_path: str = Field(
        default=_default("server", "root_path", ""),
        description="ASGI root path behind a path-rewriting proxy.",
    )
    graphql_path: str = Field(
        default=_default("server", "graphql_path", "/graphql"),
        description="Mount point of the GraphQL endpoint.",
    )
    allow_origin: list[str] = Field(
        default=_default("server", "allow_origin", []),
        description="Extra origins allowed by CORS outside production.",
    )

    # [app.db]
    db_url: str = Field(
        default="sqlite+aiosqlite:///app.db",
        validation_alias="DATABASE_URL",
        description="SQLAlchemy async database URL.",
    )
    db_logging: bool = Field(default=_default("db", "logging", False))
    db_timeout: int = Field(default=_default("db", "timeout", 30))
    db_pool_size: int = Field(default=_default("db", "pool_size", 5))
    db_max_overflow: int = Field(default=_default("db", "max_overflow", 10))
    db_pool_timeout: int = Field(default=_default("db", "pool_timeout", 30))
    db_pool_recycle: int = Field(default=_default("db", "pool_recycle", 300))
    db_pool_pre_ping: bool = Field(default=_default("db", "pool_pre_ping", True))

    clear_db_on_restart: bool = Field(
        default=False,
        validation_alias="CLEAR_DB_ON_RESTART",
        description="Drop all tables before creating them at startup.",
    )
    seed_db_on_start: bool = Field(
        default=True,
        validation_alias="SEED_DB_ON_START",
        description="Insert example tenants, environments and tasks at startup.",
    )

    # [app.broker]
    redis_url: str = Field(
        default=_default("broker", "redis_url", "redis://localhost:6379/0"),
        validation_alias="REDIS_URL",
        description="Redis instance backing the dramatiq broker.",
    )
    task_queue_name: str = Field(
        default=_default("broker", "queue_name", "tasks"),
        description="Queue dispatched tasks are sent to.",
    )

    # [app.logging]
    log_dir: str = Field(default=_default("logging", "log_dir", "log"))
    log_file: str = Field(default=_default("logging", "log_file", "app.log"))
    rotation: str = Field(default=_default("logging", "rotation", "10 MB"))
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Minimum level of the console sink.",
    )

    @computed_field
    @property
    def log_path(self) -> Path:
        """File the development and testing log sink writes to."""
        return Path(self.log_dir) / self.log_file

    @computed_field
    @property
    def reload(self) -> bool:
        """Auto-reload is only ever on in development."""
        return bool(_default("server", "reload", False)) and (
            self.app_env == "development"
        )

    @computed_field
    @property
    def allow_origin_in_dev(self) -> list[str]:
        """Configured origins plus the service itself for GraphiQL."""
        own = f"http://localhost:{self.port}"
        if own in self.allow_origin:
            return self.allow_origin
        return [*self.allow_origin, own]

    @model_validator(mode="after")
    def validate_log_level(self) -> "Settings":
        """Never log at DEBUG in production."""
        if self.app_env == "production" and self.log_level == "DEBUG":
            self.log_level = "INFO"
        return self

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


settings = Settings()
