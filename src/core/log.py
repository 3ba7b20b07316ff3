"""Diagnostic logging (loguru).

Task progress goes through the Rich printer; this sink is for debugging the
composed command lines and executions.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}"


def setup_logging(level: str = "WARNING") -> None:
    """Replace loguru's default sink with a stderr sink at `level`."""

    logger.remove()
    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=level.upper(),
        colorize=True,
    )
