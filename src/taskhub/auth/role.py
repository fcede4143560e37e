"""Caller roles."""

from enum import StrEnum

__all__ = ["Role"]


class Role(StrEnum):
    """Role of a caller; only admins bypass project and customer scoping."""

    ADMIN = "admin"
    NONE = "none"
