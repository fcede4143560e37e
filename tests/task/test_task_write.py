# ruff: noqa: S101

"""Tests for adding, updating and deleting tasks."""

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.auth.credentials import Credentials
from taskhub.common.exceptions import UnauthorizedError
from taskhub.config.broker import broker
from taskhub.config.config import settings
from taskhub.config.seed import (
    ENV_BLOG_MAIN_ID,
    ENV_SHOP_DELETED_ID,
    ENV_SHOP_DEVELOP_ID,
    ENV_SHOP_MAIN_ID,
    TASK_BLOG_MAIN_ID,
    TASK_SHOP_DEVELOP_ID,
    TASK_SHOP_MAIN_ID,
)
from taskhub.environment.exceptions import (
    EnvironmentAccessError,
    EnvironmentNotFoundError,
)
from taskhub.task.exceptions import InvalidPatchError, TaskNotFoundError
from taskhub.task.models import TaskCreate, TaskPatch
from taskhub.task.repository import get_task_by_id_db
from taskhub.task.service import (
    DELETE_SUCCESS,
    add_task_svc,
    delete_task_svc,
    update_task_svc,
)

_UNKNOWN_ID = 9999


def _queued_messages() -> int:
    return broker.queues[settings.task_queue_name].qsize()


@pytest.mark.asyncio
@pytest.mark.tasks
class TestAddTask:
    """Tests for the add task operation."""

    @classmethod
    async def test_admin_can_skip_dispatch(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Admins may store a task without handing it to execution."""
        task_input = TaskCreate(
            name="Drush status",
            environment=ENV_SHOP_MAIN_ID,
            service="cli",
            command="drush status",
            execute=False,
        )

        task = await add_task_svc(session, admin, task_input)

        assert task.id is not None
        assert task.execute is False
        assert task.status == "active"
        assert task.created is not None
        assert task.logs is None
        assert _queued_messages() == 0

    @classmethod
    async def test_non_admin_always_dispatches(
        cls, session: AsyncSession, acme_user: Credentials
    ) -> None:
        """Non-admins cannot opt out of execution."""
        task_input = TaskCreate(
            name="Drush cr", environment=ENV_SHOP_MAIN_ID, execute=False
        )

        task = await add_task_svc(session, acme_user, task_input)

        assert task.execute is True
        assert _queued_messages() == 1

    @classmethod
    async def test_status_is_normalized(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """API status names are stored lowercase."""
        task_input = TaskCreate(
            name="Imported", environment=ENV_SHOP_MAIN_ID, status="SUCCEEDED"
        )

        task = await add_task_svc(session, admin, task_input)

        assert task.status == "succeeded"

    @classmethod
    async def test_unknown_status_is_kept(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Status values outside the mapping are stored verbatim."""
        task_input = TaskCreate(
            name="Imported", environment=ENV_SHOP_MAIN_ID, status="pending"
        )

        task = await add_task_svc(session, admin, task_input)

        assert task.status == "pending"

    @classmethod
    async def test_explicit_id_is_used(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """A caller provided ID is stored as is."""
        task_input = TaskCreate(id=4242, name="Pinned", environment=ENV_SHOP_MAIN_ID)

        task = await add_task_svc(session, admin, task_input)

        assert task.id == 4242

    @classmethod
    async def test_unknown_environment(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Tasks cannot be added to environments that do not exist."""
        task_input = TaskCreate(name="Lost", environment=_UNKNOWN_ID)

        with pytest.raises(EnvironmentNotFoundError) as exc_info:
            await add_task_svc(session, admin, task_input)

        assert exc_info.value.message == f"Environment ID {_UNKNOWN_ID} doesn't exist."
        assert _queued_messages() == 0

    @classmethod
    async def test_deleted_environment(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Deleted environments count as missing."""
        task_input = TaskCreate(name="Late", environment=ENV_SHOP_DELETED_ID)

        with pytest.raises(EnvironmentNotFoundError):
            await add_task_svc(session, admin, task_input)

    @classmethod
    async def test_no_access_to_environment(
        cls, session: AsyncSession, blog_user: Credentials
    ) -> None:
        """Callers cannot add tasks outside their permitted projects."""
        task_input = TaskCreate(name="Sneaky", environment=ENV_SHOP_MAIN_ID)

        with pytest.raises(EnvironmentAccessError):
            await add_task_svc(session, blog_user, task_input)

        assert _queued_messages() == 0


@pytest.mark.asyncio
@pytest.mark.tasks
class TestDeleteTask:
    """Tests for the delete task operation."""

    @classmethod
    async def test_delete(cls, session: AsyncSession, acme_user: Credentials) -> None:
        """A permitted caller deletes the task and gets the success literal."""
        result = await delete_task_svc(session, acme_user, TASK_SHOP_DEVELOP_ID)

        assert result == DELETE_SUCCESS == "success"
        assert await get_task_by_id_db(session, TASK_SHOP_DEVELOP_ID) is None

    @classmethod
    async def test_delete_denied(cls, session: AsyncSession, blog_user: Credentials) -> None:
        """Denied deletes leave the task in place."""
        with pytest.raises(UnauthorizedError):
            await delete_task_svc(session, blog_user, TASK_SHOP_MAIN_ID)

        assert await get_task_by_id_db(session, TASK_SHOP_MAIN_ID) is not None

    @classmethod
    async def test_admin_delete_unknown_task(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Deleting a task that does not exist is not an error for admins."""
        assert await delete_task_svc(session, admin, _UNKNOWN_ID) == "success"

    @classmethod
    async def test_non_admin_delete_unknown_task(
        cls, session: AsyncSession, acme_user: Credentials
    ) -> None:
        """Non-admins are denied on tasks that do not exist."""
        with pytest.raises(UnauthorizedError):
            await delete_task_svc(session, acme_user, _UNKNOWN_ID)


@pytest.mark.asyncio
@pytest.mark.tasks
class TestUpdateTask:
    """Tests for the update task operation."""

    @classmethod
    async def test_update_name(cls, session: AsyncSession, acme_user: Credentials) -> None:
        """Only the patched field changes."""
        task = await update_task_svc(
            session, acme_user, TASK_SHOP_DEVELOP_ID, TaskPatch(name="Renamed")
        )

        assert task.name == "Renamed"
        assert task.command == "drush status"
        assert task.environment == ENV_SHOP_DEVELOP_ID

    @classmethod
    async def test_status_change_switches_logs(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Logs follow the task's status after the update."""
        task = await update_task_svc(
            session, admin, TASK_SHOP_MAIN_ID, TaskPatch(status="ACTIVE")
        )

        assert task.status == "active"
        assert task.logs == "Rebuilding cache..."

    @classmethod
    async def test_move_to_permitted_environment(
        cls, session: AsyncSession, acme_user: Credentials
    ) -> None:
        """Tasks can move between environments the caller may access."""
        task = await update_task_svc(
            session,
            acme_user,
            TASK_BLOG_MAIN_ID,
            TaskPatch(environment=ENV_SHOP_MAIN_ID),
        )

        assert task.environment == ENV_SHOP_MAIN_ID

    @classmethod
    async def test_move_to_forbidden_environment(
        cls, session: AsyncSession, blog_user: Credentials
    ) -> None:
        """Moving a task into an environment outside the caller's reach fails."""
        with pytest.raises(EnvironmentAccessError):
            await update_task_svc(
                session,
                blog_user,
                TASK_BLOG_MAIN_ID,
                TaskPatch(environment=ENV_SHOP_MAIN_ID),
            )

        task = await get_task_by_id_db(session, TASK_BLOG_MAIN_ID)
        assert task is not None
        assert task.environment == ENV_BLOG_MAIN_ID

    @classmethod
    async def test_move_to_unknown_environment(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Tasks cannot move to an environment that does not exist."""
        with pytest.raises(EnvironmentNotFoundError):
            await update_task_svc(
                session, admin, TASK_SHOP_MAIN_ID, TaskPatch(environment=_UNKNOWN_ID)
            )

    @classmethod
    async def test_empty_patch(cls, session: AsyncSession, admin: Credentials) -> None:
        """A patch must set at least one field."""
        with pytest.raises(InvalidPatchError) as exc_info:
            await update_task_svc(session, admin, TASK_SHOP_MAIN_ID, TaskPatch())

        assert exc_info.value.message == "Input patch requires at least 1 attribute"

    @classmethod
    async def test_null_only_patch(cls, session: AsyncSession, admin: Credentials) -> None:
        """Fields set to null do not count as patched."""
        with pytest.raises(InvalidPatchError):
            await update_task_svc(
                session, admin, TASK_SHOP_MAIN_ID, TaskPatch(name=None, command=None)
            )

    @classmethod
    async def test_empty_patch_checked_before_access(
        cls, session: AsyncSession, nobody: Credentials
    ) -> None:
        """Empty patches are rejected as invalid input for every caller."""
        with pytest.raises(InvalidPatchError):
            await update_task_svc(session, nobody, TASK_SHOP_MAIN_ID, TaskPatch())

    @classmethod
    async def test_update_denied(cls, session: AsyncSession, nobody: Credentials) -> None:
        """Callers without access cannot change the task."""
        with pytest.raises(UnauthorizedError):
            await update_task_svc(
                session, nobody, TASK_SHOP_MAIN_ID, TaskPatch(name="Hijacked")
            )

    @classmethod
    async def test_update_unknown_task(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Admins updating a missing task get a not found error."""
        with pytest.raises(TaskNotFoundError):
            await update_task_svc(session, admin, _UNKNOWN_ID, TaskPatch(name="Ghost"))
