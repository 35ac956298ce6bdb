"""Loguru sink setup for scripts that use the repositories."""

import os
import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message}"


def setup_logging(level: str | None = None) -> None:
    """Replace loguru's default sink with a stderr sink at ``level``.

    ``level`` falls back to ``LOG_LEVEL`` and then to ``INFO``.
    """

    resolved = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logger.remove()
    logger.add(sys.stderr, level=resolved, format=LOG_FORMAT)
