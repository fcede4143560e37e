"""Statement builders for the tasks repository."""

from typing import Any

from sqlalchemy import ColumnElement, Delete, Update, delete, or_, update
from sqlmodel import col, select
from sqlmodel.sql.expression import Select, SelectOfScalar

from taskhub.auth.credentials import Credentials
from taskhub.environment.models import Environment, Project

from .models import Task, TaskLog

__all__ = [
    "delete_task_stmt",
    "select_latest_log",
    "select_perms_for_task",
    "select_task",
    "select_task_by_remote_id",
    "select_tasks_by_environment",
    "update_task_stmt",
]


def select_tasks_by_environment(
    environment_id: int, credentials: Credentials
) -> SelectOfScalar[Task]:
    """Select the tasks of an environment visible to the caller.

    Args:
        environment_id: ID of the environment.
        credentials: Caller credentials; non-admins only see tasks of their
            permitted customers and projects.

    Returns:
        SQLModel *Select* of ``Task`` rows ordered by ID.
    """
    statement = (
        select(Task)
        .join(Environment, col(Environment.id) == col(Task.environment))
        .join(Project, col(Project.id) == col(Environment.project))
        .where(Environment.id == environment_id)
        .order_by(col(Task.id))
    )

    if not credentials.is_admin:
        statement = statement.where(_permission_filter(credentials))

    return statement


def select_perms_for_task(task_id: int) -> Select[tuple[int, int]]:
    """Select ``(pid, cid)``: project and customer owning a task."""
    return (
        select(
            col(Environment.project).label("pid"),
            col(Project.customer).label("cid"),
        )
        .select_from(Task)
        .join(Environment, col(Environment.id) == col(Task.environment))
        .join(Project, col(Project.id) == col(Environment.project))
        .where(Task.id == task_id)
    )


def select_task(task_id: int) -> SelectOfScalar[Task]:
    """Select a task by ID, refreshing any copy already in the session."""
    return (
        select(Task)
        .where(Task.id == task_id)
        .execution_options(populate_existing=True)
    )


def select_task_by_remote_id(remote_id: str) -> SelectOfScalar[Task]:
    """Select a task by the ID the remote execution system assigned to it."""
    return select(Task).where(Task.remote_id == remote_id).order_by(col(Task.id))


def select_latest_log(remote_id: str, status: str) -> SelectOfScalar[str]:
    """Select the newest log message of a task run in a given status."""
    return (
        select(TaskLog.message)
        .where(TaskLog.remote_id == remote_id, TaskLog.status == status)
        .order_by(col(TaskLog.created).desc(), col(TaskLog.id).desc())
        .limit(1)
    )


def update_task_stmt(task_id: int, values: dict[str, Any]) -> Update:
    """Build an UPDATE applying ``values`` to a single task."""
    return update(Task).where(col(Task.id) == task_id).values(**values)


def delete_task_stmt(task_id: int) -> Delete:
    """Build a DELETE for a single task."""
    return delete(Task).where(col(Task.id) == task_id)


# -----------------------------------------------------------------------------
# Utility ---------------------------------------------------------------------
# -----------------------------------------------------------------------------


def _permission_filter(credentials: Credentials) -> ColumnElement[bool]:
    """Restrict rows to the caller's permitted customers or projects.

    Expects ``Project`` to be part of the statement's FROM clause.
    """
    return or_(
        col(Project.customer).in_(sorted(credentials.customers)),
        col(Project.id).in_(sorted(credentials.projects)),
    )
