"""Declaration of the root package taskhub."""

from taskhub.app import app
from taskhub.server import run

__all__ = ["app", "main"]


def main() -> None:
    """Run the application server."""
    run()
