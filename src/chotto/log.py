"""Logging setup for the chotto logger hierarchy."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "chotto"


def configure_logging(level: str = "WARNING", console: Console | None = None) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Library modules only call ``logging.getLogger(__name__)``; handlers are
    installed here by the CLI. Repeated calls update the level without adding
    duplicate handlers.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR)
        console: Console to write to (default: stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    resolved = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(resolved)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
