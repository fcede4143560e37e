"""Common module for shared error handling and health endpoints.

Key Components:
- App errors: Application-specific error types with structured error codes
- Shared exceptions: not found, invalid input, authentication and authorization
- Health router: liveness endpoints for load balancers and orchestrators
"""

from .app_error import AppError
from .exceptions import (
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
    UnauthorizedError,
)

__all__ = [
    "AppError",
    "InvalidInputError",
    "NotFoundError",
    "UnauthenticatedError",
    "UnauthorizedError",
]
