# ruff: noqa: S101

"""Tests for Drush dispatch operations and the background actor."""

import dramatiq
import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.auth.credentials import Credentials
from taskhub.config.broker import broker
from taskhub.config.config import settings
from taskhub.config.seed import (
    ENV_BLOG_MAIN_ID,
    ENV_SHOP_DEVELOP_ID,
    ENV_SHOP_MAIN_ID,
    ENV_SHOP_NOCLI_ID,
    TASK_BLOG_MAIN_ID,
)
from taskhub.environment.exceptions import (
    EnvironmentAccessError,
    EnvironmentNotFoundError,
    MissingServiceError,
    ProjectMismatchError,
)
from taskhub.task.repository import start_task_db
from taskhub.task.service import (
    task_drush_archive_dump_svc,
    task_drush_rsync_files_svc,
    task_drush_sql_sync_svc,
)

_UNKNOWN_ID = 9999


def _dequeue() -> dramatiq.Message:
    queue = broker.queues[settings.task_queue_name]
    return dramatiq.Message.decode(queue.get_nowait())


@pytest.mark.asyncio
@pytest.mark.task_dispatch
class TestDrushArchiveDump:
    """Tests for dispatching drush archive-dump."""

    @classmethod
    async def test_dispatch(cls, session: AsyncSession, acme_user: Credentials) -> None:
        """The task runs on the cli service and is handed to the worker."""
        task = await task_drush_archive_dump_svc(session, acme_user, ENV_SHOP_MAIN_ID)

        assert task.name == "Drush archive-dump"
        assert task.command == "drush archive-dump"
        assert task.service == "cli"
        assert task.environment == ENV_SHOP_MAIN_ID
        assert task.execute is True

        message = _dequeue()
        assert message.actor_name == "execute_task_bg"
        assert list(message.args) == [task.id]

    @classmethod
    async def test_missing_cli_service(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Environments without a cli service cannot run Drush."""
        with pytest.raises(MissingServiceError) as exc_info:
            await task_drush_archive_dump_svc(session, admin, ENV_SHOP_NOCLI_ID)

        assert exc_info.value.message == (
            f"Environment {ENV_SHOP_NOCLI_ID} has no service cli."
        )

    @classmethod
    async def test_unknown_environment(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Unknown environments are rejected."""
        with pytest.raises(EnvironmentNotFoundError):
            await task_drush_archive_dump_svc(session, admin, _UNKNOWN_ID)

    @classmethod
    async def test_no_access(cls, session: AsyncSession, blog_user: Credentials) -> None:
        """Callers need access to the environment."""
        with pytest.raises(EnvironmentAccessError):
            await task_drush_archive_dump_svc(session, blog_user, ENV_SHOP_MAIN_ID)


@pytest.mark.asyncio
@pytest.mark.task_dispatch
class TestDrushSync:
    """Tests for dispatching database and files syncs."""

    @classmethod
    async def test_sql_sync(cls, session: AsyncSession, admin: Credentials) -> None:
        """The sync task runs on the destination environment."""
        task = await task_drush_sql_sync_svc(
            session, admin, ENV_SHOP_MAIN_ID, ENV_SHOP_DEVELOP_ID
        )

        assert task.name == "Sync DB main -> develop"
        assert task.command == "drush sql-sync @main @develop"
        assert task.environment == ENV_SHOP_DEVELOP_ID
        assert task.service == "cli"
        assert list(_dequeue().args) == [task.id]

    @classmethod
    async def test_rsync_files(cls, session: AsyncSession, acme_user: Credentials) -> None:
        """Files are copied from the source into the destination."""
        task = await task_drush_rsync_files_svc(
            session, acme_user, ENV_SHOP_DEVELOP_ID, ENV_SHOP_MAIN_ID
        )

        assert task.name == "Sync files develop -> main"
        assert task.command == "drush rsync @develop:%files @main:%files"
        assert task.environment == ENV_SHOP_MAIN_ID

    @classmethod
    async def test_cross_project_sync(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Syncs are limited to environments of one project."""
        with pytest.raises(ProjectMismatchError):
            await task_drush_sql_sync_svc(
                session, admin, ENV_SHOP_MAIN_ID, ENV_BLOG_MAIN_ID
            )

        with pytest.raises(ProjectMismatchError):
            await task_drush_rsync_files_svc(
                session, admin, ENV_SHOP_MAIN_ID, ENV_BLOG_MAIN_ID
            )
        assert broker.queues[settings.task_queue_name].qsize() == 0

    @classmethod
    async def test_source_without_cli(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """The source environment must run a cli service."""
        with pytest.raises(MissingServiceError):
            await task_drush_rsync_files_svc(
                session, admin, ENV_SHOP_NOCLI_ID, ENV_SHOP_MAIN_ID
            )

    @classmethod
    async def test_destination_without_cli(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Only the source needs a cli service."""
        task = await task_drush_sql_sync_svc(
            session, admin, ENV_SHOP_MAIN_ID, ENV_SHOP_NOCLI_ID
        )

        assert task.environment == ENV_SHOP_NOCLI_ID

    @classmethod
    async def test_unknown_destination(
        cls, session: AsyncSession, admin: Credentials
    ) -> None:
        """Both environments must exist."""
        with pytest.raises(EnvironmentNotFoundError):
            await task_drush_sql_sync_svc(session, admin, ENV_SHOP_MAIN_ID, _UNKNOWN_ID)

    @classmethod
    async def test_no_access(cls, session: AsyncSession, blog_user: Credentials) -> None:
        """Callers need access to both environments."""
        with pytest.raises(EnvironmentAccessError):
            await task_drush_sql_sync_svc(
                session, blog_user, ENV_SHOP_MAIN_ID, ENV_SHOP_DEVELOP_ID
            )

        assert broker.queues[settings.task_queue_name].qsize() == 0


@pytest.mark.asyncio
@pytest.mark.task_dispatch
class TestStartTask:
    """Tests for the state change applied when a worker picks up a task."""

    @classmethod
    async def test_start(cls, session: AsyncSession) -> None:
        """Started tasks become active and get a start timestamp."""
        task = await start_task_db(session, TASK_BLOG_MAIN_ID)

        assert task is not None
        assert task.status == "active"
        assert task.started is not None

    @classmethod
    async def test_vanished_task(cls, session: AsyncSession) -> None:
        """Tasks deleted before pickup are skipped."""
        assert await start_task_db(session, _UNKNOWN_ID) is None
