"""Seed the database with initial data."""

from datetime import datetime
from zoneinfo import ZoneInfo

from loguru import logger
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from taskhub.auth.models import ApiUser, CustomerUser, ProjectUser
from taskhub.auth.role import Role
from taskhub.environment.models import (
    Customer,
    Environment,
    EnvironmentService,
    Project,
)
from taskhub.task.models import Task, TaskLog

__all__ = ["seed_db"]

GERMANY_TZ = ZoneInfo("Europe/Berlin")


CUSTOMER_ACME_ID = 1
CUSTOMER_GLOBEX_ID = 2

PROJECT_SHOP_ID = 10
PROJECT_BLOG_ID = 11
PROJECT_INTRANET_ID = 12

ENV_SHOP_MAIN_ID = 100
ENV_SHOP_DEVELOP_ID = 101
ENV_SHOP_NOCLI_ID = 102
ENV_BLOG_MAIN_ID = 110
ENV_INTRANET_MAIN_ID = 120
ENV_SHOP_DELETED_ID = 103

TASK_SHOP_MAIN_ID = 1000
TASK_SHOP_DEVELOP_ID = 1001
TASK_BLOG_MAIN_ID = 1002
TASK_INTRANET_MAIN_ID = 1003

REMOTE_ID_SHOP_MAIN = "remote-shop-main-1"
REMOTE_ID_INTRANET_MAIN = "remote-intranet-main-1"

ADMIN_API_KEY = "admin-key"
ACME_API_KEY = "acme-key"
BLOG_API_KEY = "blog-key"
NOBODY_API_KEY = "nobody-key"


async def seed_db(session: AsyncSession) -> None:
    """Seed the database with example tenants, environments and tasks.

    Acme owns the shop and blog projects, Globex owns the intranet. The acme
    user may act on everything of Acme, the blog user only on the blog
    project and the nobody user on nothing.

    Args:
        session: The SQLModel async database session.
    """
    result = await session.exec(select(Customer))
    if result.first() is not None:
        logger.debug("Database already seeded")
        return

    session.add_all([
        Customer(id=CUSTOMER_ACME_ID, name="acme"),
        Customer(id=CUSTOMER_GLOBEX_ID, name="globex"),
    ])
    await session.flush()

    session.add_all([
        Project(id=PROJECT_SHOP_ID, name="shop", customer=CUSTOMER_ACME_ID),
        Project(id=PROJECT_BLOG_ID, name="blog", customer=CUSTOMER_ACME_ID),
        Project(id=PROJECT_INTRANET_ID, name="intranet", customer=CUSTOMER_GLOBEX_ID),
    ])
    await session.flush()

    session.add_all([
        Environment(
            id=ENV_SHOP_MAIN_ID,
            name="main",
            project=PROJECT_SHOP_ID,
            environment_type="production",
        ),
        Environment(id=ENV_SHOP_DEVELOP_ID, name="develop", project=PROJECT_SHOP_ID),
        Environment(id=ENV_SHOP_NOCLI_ID, name="static", project=PROJECT_SHOP_ID),
        Environment(
            id=ENV_SHOP_DELETED_ID,
            name="feature-old",
            project=PROJECT_SHOP_ID,
            deleted=datetime(2025, 5, 1, 12, 0, tzinfo=GERMANY_TZ),
        ),
        Environment(
            id=ENV_BLOG_MAIN_ID,
            name="main",
            project=PROJECT_BLOG_ID,
            environment_type="production",
        ),
        Environment(
            id=ENV_INTRANET_MAIN_ID,
            name="main",
            project=PROJECT_INTRANET_ID,
            environment_type="production",
        ),
    ])
    await session.flush()

    session.add_all([
        EnvironmentService(environment=ENV_SHOP_MAIN_ID, name="cli"),
        EnvironmentService(environment=ENV_SHOP_MAIN_ID, name="nginx"),
        EnvironmentService(environment=ENV_SHOP_DEVELOP_ID, name="cli"),
        EnvironmentService(environment=ENV_SHOP_DEVELOP_ID, name="nginx"),
        EnvironmentService(environment=ENV_SHOP_NOCLI_ID, name="nginx"),
        EnvironmentService(environment=ENV_BLOG_MAIN_ID, name="cli"),
        EnvironmentService(environment=ENV_INTRANET_MAIN_ID, name="cli"),
    ])

    session.add_all([
        Task(
            id=TASK_SHOP_MAIN_ID,
            name="Drush cache rebuild",
            status="succeeded",
            created=datetime(2025, 6, 10, 9, 0, tzinfo=GERMANY_TZ),
            started=datetime(2025, 6, 10, 9, 1, tzinfo=GERMANY_TZ),
            completed=datetime(2025, 6, 10, 9, 2, tzinfo=GERMANY_TZ),
            environment=ENV_SHOP_MAIN_ID,
            service="cli",
            command="drush cr",
            remote_id=REMOTE_ID_SHOP_MAIN,
        ),
        Task(
            id=TASK_SHOP_DEVELOP_ID,
            name="Drush status",
            status="active",
            created=datetime(2025, 6, 11, 14, 30, tzinfo=GERMANY_TZ),
            environment=ENV_SHOP_DEVELOP_ID,
            service="cli",
            command="drush status",
        ),
        Task(
            id=TASK_BLOG_MAIN_ID,
            name="Drush updb",
            status="failed",
            created=datetime(2025, 6, 12, 8, 0, tzinfo=GERMANY_TZ),
            environment=ENV_BLOG_MAIN_ID,
            service="cli",
            command="drush updb -y",
        ),
        Task(
            id=TASK_INTRANET_MAIN_ID,
            name="Drush cron",
            status="succeeded",
            created=datetime(2025, 6, 13, 3, 0, tzinfo=GERMANY_TZ),
            environment=ENV_INTRANET_MAIN_ID,
            service="cli",
            command="drush cron",
            remote_id=REMOTE_ID_INTRANET_MAIN,
        ),
    ])

    session.add_all([
        TaskLog(
            remote_id=REMOTE_ID_SHOP_MAIN,
            status="active",
            message="Rebuilding cache...",
            created=datetime(2025, 6, 10, 9, 1, tzinfo=GERMANY_TZ),
        ),
        TaskLog(
            remote_id=REMOTE_ID_SHOP_MAIN,
            status="succeeded",
            message="[success] Cache rebuild complete.",
            created=datetime(2025, 6, 10, 9, 2, tzinfo=GERMANY_TZ),
        ),
    ])

    session.add_all([
        ApiUser(id=1, name="admin", api_key=ADMIN_API_KEY, role=Role.ADMIN),
        ApiUser(id=2, name="acme-dev", api_key=ACME_API_KEY),
        ApiUser(id=3, name="blog-editor", api_key=BLOG_API_KEY),
        ApiUser(id=4, name="nobody", api_key=NOBODY_API_KEY),
    ])
    await session.flush()

    session.add_all([
        CustomerUser(customer=CUSTOMER_ACME_ID, user=2),
        ProjectUser(project=PROJECT_BLOG_ID, user=3),
    ])

    await session.commit()
    logger.info("Database seeded with initial data")
