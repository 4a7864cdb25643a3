"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; this module decides
where the records go. On a terminal they are rendered by Rich; while the
Textual UI owns the screen they go to a plain file instead.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "kalyana"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(
    level: str | int = "INFO",
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the ``kalyana`` logger hierarchy.

    Args:
        level: Level name ("debug", "info", ...) or numeric level
        log_file: Write records to this file instead of the terminal
        console: Rich console for terminal output (stderr by default)

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Reconfiguring replaces the previous handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
