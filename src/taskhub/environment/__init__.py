"""Environment module: ownership chain and precondition validators.

Environments belong to a project, projects belong to a customer. This chain is
what caller permissions are checked against, and the validators here guard
task creation against missing environments, missing services and
cross-project syncs.
"""

from .exceptions import (
    EnvironmentAccessError,
    EnvironmentNotFoundError,
    MissingServiceError,
    ProjectMismatchError,
)
from .models import Customer, Environment, EnvironmentService, Project
from .validators import (
    environment_exists,
    environment_has_service,
    environments_have_same_project,
    user_access_environment,
)

__all__ = [
    "Customer",
    "Environment",
    "EnvironmentAccessError",
    "EnvironmentNotFoundError",
    "EnvironmentService",
    "MissingServiceError",
    "Project",
    "ProjectMismatchError",
    "environment_exists",
    "environment_has_service",
    "environments_have_same_project",
    "user_access_environment",
]
