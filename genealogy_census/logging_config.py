"""Logging setup shared by the CLI and library code.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed once by ``configure_logging`` from the command-line entry point.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Install a rich console handler on the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        console: Optional rich console to write to (default: stderr)
    """
    global _configured

    logger = logging.getLogger("genealogy_census")
    logger.setLevel(level.upper())

    if _configured:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    _configured = True
