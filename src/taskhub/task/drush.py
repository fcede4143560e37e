"""Fixed-shape Drush tasks created by the dispatch resolvers."""

from typing import Final

from taskhub.environment.models import Environment

from .models import TaskCreate

__all__ = [
    "CLI_SERVICE",
    "archive_dump_task",
    "rsync_files_task",
    "sql_sync_task",
]


CLI_SERVICE: Final = "cli"


def archive_dump_task(environment_id: int) -> TaskCreate:
    """Task that writes a Drush archive of an environment."""
    return TaskCreate(
        name="Drush archive-dump",
        environment=environment_id,
        service=CLI_SERVICE,
        command="drush archive-dump",
        execute=True,
    )


def sql_sync_task(source: Environment, destination: Environment) -> TaskCreate:
    """Task that copies the database of ``source`` into ``destination``."""
    return TaskCreate(
        name=f"Sync DB {source.name} -> {destination.name}",
        environment=_id(destination),
        service=CLI_SERVICE,
        command=f"drush sql-sync @{source.name} @{destination.name}",
        execute=True,
    )


def rsync_files_task(source: Environment, destination: Environment) -> TaskCreate:
    """Task that copies the public files of ``source`` into ``destination``."""
    return TaskCreate(
        name=f"Sync files {source.name} -> {destination.name}",
        environment=_id(destination),
        service=CLI_SERVICE,
        command=f"drush rsync @{source.name}:%files @{destination.name}:%files",
        execute=True,
    )


def _id(environment: Environment) -> int:
    if environment.id is None:
        raise ValueError("Environment has not been persisted")
    return environment.id
