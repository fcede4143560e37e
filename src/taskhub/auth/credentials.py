"""Per-request caller credentials."""

from pydantic import BaseModel, ConfigDict, Field

from .role import Role

__all__ = ["Credentials", "has_permission"]


class Credentials(BaseModel):
    """Role and permitted customer/project ids of the current caller."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the caller")
    customers: frozenset[int] = Field(
        default=frozenset(), description="Customer ids the caller may act on"
    )
    projects: frozenset[int] = Field(
        default=frozenset(), description="Project ids the caller may act on"
    )

    @property
    def is_admin(self) -> bool:
        """Whether the caller bypasses customer/project scoping."""
        return self.role == Role.ADMIN


def has_permission(
    credentials: Credentials, project_id: int | None, customer_id: int | None
) -> bool:
    """Check whether the caller may act on a project owned by a customer.

    Args:
        credentials: Credentials of the caller.
        project_id: Project the resource belongs to, ``None`` if unknown.
        customer_id: Customer owning that project, ``None`` if unknown.

    Returns:
        True for admins, or when either id is in the caller's permitted sets.
    """
    if credentials.is_admin:
        return True
    return project_id in credentials.projects or customer_id in credentials.customers
