"""Logging setup with rich console output.

Usage:
    from gql_opgen.core.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Generated 12 query files")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Shared console so log lines and progress output interleave cleanly
console = Console(stderr=True)

ROOT_LOGGER_NAME = "gql_opgen"


def _configure_root(level: str | None = None) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
        root.propagate = False
        root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    if level is not None:
        root.setLevel(level.upper())
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``gql_opgen`` hierarchy.

    Handlers live on the package root logger, so every module logger shares
    one rich handler and one level.

    Args:
        name: Logger name (typically ``__name__`` of the module)

    Returns:
        Logger instance
    """
    _configure_root()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Set the level for all gql-opgen loggers (e.g. ``"DEBUG"``)."""
    _configure_root(level)
