"""API user and membership models."""

from sqlmodel import Field, SQLModel

from .role import Role

__all__ = ["ApiUser", "CustomerUser", "ProjectUser"]


class ApiUser(SQLModel, table=True):
    """Caller identity resolved from an API key."""

    __tablename__ = "api_user"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(description="Display name of the user.")

    api_key: str = Field(
        index=True, unique=True, description="Bearer key presented by the caller."
    )

    role: Role = Field(default=Role.NONE, description="Role of the user.")


class CustomerUser(SQLModel, table=True):
    """Grants a user access to every project of a customer."""

    __tablename__ = "customer_user"

    customer: int = Field(foreign_key="customer.id", primary_key=True)

    user: int = Field(foreign_key="api_user.id", primary_key=True)


class ProjectUser(SQLModel, table=True):
    """Grants a user access to a single project."""

    __tablename__ = "project_user"

    project: int = Field(foreign_key="project.id", primary_key=True)

    user: int = Field(foreign_key="api_user.id", primary_key=True)
