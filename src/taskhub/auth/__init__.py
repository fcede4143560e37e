"""Authentication and authorization of API callers."""

from .credentials import Credentials, has_permission
from .models import ApiUser, CustomerUser, ProjectUser
from .repository import get_credentials_db
from .role import Role

__all__ = [
    "ApiUser",
    "Credentials",
    "CustomerUser",
    "ProjectUser",
    "Role",
    "get_credentials_db",
    "has_permission",
]
