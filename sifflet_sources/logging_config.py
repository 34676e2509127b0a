"""Logging configuration for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "sifflet_sources"


def configure_logging(level: str = "WARNING", console: Console | None = None) -> None:
    """Send package logs to stderr through Rich.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        console: Console to render to (defaults to a stderr console)
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)
    # Replace handlers from a previous call
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=log_level <= logging.DEBUG,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    # Quiet noisy loggers
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    )
