"""GraphQL query and mutation resolvers delegating to the task service."""

from typing import Annotated

import strawberry
from strawberry.types import Info

from taskhub.task.service import (
    add_task_svc,
    delete_task_svc,
    get_task_by_remote_id_svc,
    get_tasks_by_environment_id_svc,
    task_drush_archive_dump_svc,
    task_drush_rsync_files_svc,
    task_drush_sql_sync_svc,
    update_task_svc,
)

from .context import TaskhubContext
from .types import DeleteTaskInput, TaskInput, TaskType, UpdateTaskInput

__all__ = ["Mutation", "Query"]


TaskhubInfo = Info[TaskhubContext, None]


@strawberry.type
class Query:
    @strawberry.field(description="Tasks of an environment visible to the caller.")
    async def tasks_by_environment_id(
        self, info: TaskhubInfo, environment_id: int
    ) -> list[TaskType]:
        ctx = info.context
        tasks = await get_tasks_by_environment_id_svc(
            ctx.db, ctx.require_credentials(), environment_id
        )
        return [TaskType.from_public(task) for task in tasks]

    @strawberry.field(description="Task with the given remote ID, if any.")
    async def task_by_remote_id(
        self, info: TaskhubInfo, remote_id: str
    ) -> TaskType | None:
        ctx = info.context
        task = await get_task_by_remote_id_svc(
            ctx.db, ctx.require_credentials(), remote_id
        )
        return TaskType.from_public(task) if task else None


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Create a task.")
    async def add_task(
        self,
        info: TaskhubInfo,
        task_input: Annotated[TaskInput, strawberry.argument(name="input")],
    ) -> TaskType:
        ctx = info.context
        task = await add_task_svc(
            ctx.db, ctx.require_credentials(), task_input.to_create()
        )
        return TaskType.from_public(task)

    @strawberry.mutation(description="Delete a task.")
    async def delete_task(
        self,
        info: TaskhubInfo,
        task_input: Annotated[DeleteTaskInput, strawberry.argument(name="input")],
    ) -> str:
        ctx = info.context
        return await delete_task_svc(ctx.db, ctx.require_credentials(), task_input.id)

    @strawberry.mutation(description="Change fields of a task.")
    async def update_task(
        self,
        info: TaskhubInfo,
        task_input: Annotated[UpdateTaskInput, strawberry.argument(name="input")],
    ) -> TaskType:
        ctx = info.context
        task = await update_task_svc(
            ctx.db,
            ctx.require_credentials(),
            task_input.id,
            task_input.patch.to_patch(),
        )
        return TaskType.from_public(task)

    @strawberry.mutation(description="Run drush archive-dump on an environment.")
    async def task_drush_archive_dump(
        self, info: TaskhubInfo, environment_id: int
    ) -> TaskType:
        ctx = info.context
        task = await task_drush_archive_dump_svc(
            ctx.db, ctx.require_credentials(), environment_id
        )
        return TaskType.from_public(task)

    @strawberry.mutation(description="Copy a database between two environments.")
    async def task_drush_sql_sync(
        self,
        info: TaskhubInfo,
        source_environment_id: int,
        destination_environment_id: int,
    ) -> TaskType:
        ctx = info.context
        task = await task_drush_sql_sync_svc(
            ctx.db,
            ctx.require_credentials(),
            source_environment_id,
            destination_environment_id,
        )
        return TaskType.from_public(task)

    @strawberry.mutation(description="Copy public files between two environments.")
    async def task_drush_rsync_files(
        self,
        info: TaskhubInfo,
        source_environment_id: int,
        destination_environment_id: int,
    ) -> TaskType:
        ctx = info.context
        task = await task_drush_rsync_files_svc(
            ctx.db,
            ctx.require_credentials(),
            source_environment_id,
            destination_environment_id,
        )
        return TaskType.from_public(task)
