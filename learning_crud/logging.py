import sys
from typing import Optional

from loguru import logger

from learning_crud.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def _stderr_sink(message) -> None:
    # Resolved per call so a swapped sys.stderr (e.g. a test runner) is honoured.
    sys.stderr.write(message)


class AppLogger:
    """Global logger configuration for the application.

    Replaces loguru's default handler with a single stderr sink whose level
    comes from ``get_config().log_level``. Standard output is left to the
    entry point.
    """
    def __init__(self) -> None:
        log_level = get_config().log_level
        logger.remove()
        logger.add(sink=_stderr_sink, level=log_level, format=LOG_FORMAT)
        self.logger = logger

    def get_logger(self, name: Optional[str] = None):
        """Get the configured logger instance.

        Args:
            name (str, optional): Name for the logger context. Defaults to None.
        Returns:
            loguru.Logger: The configured logger instance.
        """
        if name:
            return self.logger.bind(name=name)
        return self.logger


def get_logger(name: Optional[str] = None):
    """Get a new application logger using the latest config."""
    return AppLogger().get_logger(name)
