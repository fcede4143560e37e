"""Startup banner."""

import platform
import sys

from pyfiglet import figlet_format

from taskhub.config.config import Settings

_CYAN = "\033[1;36m"
_YELLOW = "\033[1;33m"
_GREY = "\033[0;37m"
_RESET = "\033[0m"


def create_banner(settings: Settings, silent: bool = False) -> str:
    """Render the service banner with the effective configuration.

    Args:
        settings: Application configuration settings
        silent: If True, only return the banner without printing it

    Returns:
        The banner text
    """
    rule = f"{_GREY}{'-' * 60}{_RESET}"
    base_url = f"http://{settings.host_binding}:{settings.port}{settings.root_path}"
    db_engine = settings.db_url.split("://", 1)[0]
    broker = settings.redis_url.rsplit("@", 1)[-1]
    if settings.app_env == "testing":
        broker = "stub"

    sections: dict[str, list[tuple[str, object]]] = {
        "Endpoints": [
            ("GraphQL", base_url + settings.graphql_path),
            ("Health", base_url + "/health"),
            ("Metrics", base_url + "/metrics"),
        ],
        "Storage": [
            ("Database", db_engine),
            ("Drop tables on start", settings.clear_db_on_restart),
            ("Seed on start", settings.seed_db_on_start),
        ],
        "Dispatch": [
            ("Broker", broker),
            ("Queue", settings.task_queue_name),
        ],
        "Runtime": [
            ("Environment", settings.app_env),
            ("Log level", settings.log_level),
            ("Reload", settings.reload),
            ("Python", sys.version.split()[0]),
            ("OS", f"{platform.system()} {platform.release()}"),
        ],
    }

    lines = [
        _CYAN + figlet_format("taskhub", font="slant") + _RESET,
        f"{_YELLOW}Taskhub v{settings.version}{_RESET}",
        rule,
    ]
    for title, entries in sections.items():
        lines.append(f"{_YELLOW}{title}{_RESET}")
        lines.extend(f"  {label:<22}{_render(value)}" for label, value in entries)
    lines.append(rule)

    text = "\n".join(lines)
    if not silent:
        print(text)  # noqa: T201
    return text


def _render(value: object) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)
