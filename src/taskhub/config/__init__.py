"""Configuration module for the Taskhub application.

This module provides centralized configuration management for the entire application,
including database connections, logging setup, error handling, and application settings.

Key Components:
- settings: Application configuration loaded from environment variables and TOML files
- Database: SQLAlchemy async engine and session management
- Logging: Loguru-based logging configuration with development/production modes
- Error handling: Centralized error codes and error messages
- Database seeding: Initial tenants, environments and tasks for development and testing
"""

from taskhub.config.config import settings
from taskhub.config.db import engine, get_session
from taskhub.config.errors import ErrorCode, ErrorNames
from taskhub.config.logger import config_logger
from taskhub.config.seed import seed_db

__all__ = [
    "ErrorCode",
    "ErrorNames",
    "config_logger",
    "engine",
    "get_session",
    "seed_db",
    "settings",
]
