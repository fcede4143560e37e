"""Customer, project and environment models."""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel, func

__all__ = ["Customer", "Environment", "EnvironmentService", "Project"]


class Customer(SQLModel, table=True):
    """Customer owning one or more projects."""

    __tablename__ = "customer"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(index=True, unique=True, description="Name of the customer.")


class Project(SQLModel, table=True):
    """Project grouping the environments of one customer."""

    __tablename__ = "project"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(index=True, unique=True, description="Name of the project.")

    customer: int = Field(
        foreign_key="customer.id", index=True, description="Owning customer."
    )


class Environment(SQLModel, table=True):
    """Deployed instance of a project, for example a branch deployment."""

    __tablename__ = "environment"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(description="Name of the environment, usually the branch.")

    project: int = Field(
        foreign_key="project.id", index=True, description="Owning project."
    )

    environment_type: str = Field(
        default="development",
        description="Either production or development.",
    )

    deploy_type: str = Field(
        default="branch", description="Deployment trigger (branch or pullrequest)."
    )

    created: datetime = Field(
        sa_column=Column(DateTime(timezone=True), insert_default=func.now()),
        description="Timestamp when the environment was created.",
    )

    deleted: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Timestamp when the environment was deleted.",
    )


class EnvironmentService(SQLModel, table=True):
    """Service (container) running inside an environment."""

    __tablename__ = "environment_service"

    id: int | None = Field(default=None, primary_key=True)

    environment: int = Field(foreign_key="environment.id", index=True)

    name: str = Field(description="Service name, for example cli or nginx.")
