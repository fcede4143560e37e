"""Task module: CI/ops jobs dispatched against environments.

Key Components:
- Models: task and task log tables plus create, patch and public models
- Status handling: normalization of API status names to stored values
- Query builder and repository: permission-scoped SQL for task rows
- Permissions: one access check composed by the read, update and delete paths
- Service: the task queries, mutations and Drush dispatch operations
- Background actor: hands dispatched tasks to execution through dramatiq
"""

from .exceptions import InvalidPatchError, TaskNotFoundError
from .models import Task, TaskCreate, TaskLog, TaskPatch, TaskPublic
from .task_status import TaskStatus, normalize_task_status

__all__ = [
    "InvalidPatchError",
    "Task",
    "TaskCreate",
    "TaskLog",
    "TaskNotFoundError",
    "TaskPatch",
    "TaskPublic",
    "TaskStatus",
    "normalize_task_status",
]
