"""Worker entrypoint for dramatiq.

Start a worker with ``dramatiq taskhub.tasks``.
"""

from taskhub.auth.models import ApiUser, CustomerUser, ProjectUser  # noqa: F401
from taskhub.config.broker import broker
from taskhub.config.logger import config_logger
from taskhub.environment.models import Environment, EnvironmentService, Project  # noqa: F401
from taskhub.task.models import Task, TaskLog  # noqa: F401
from taskhub.task.tasks import execute_task_bg

config_logger()

__all__ = ["broker", "execute_task_bg"]
