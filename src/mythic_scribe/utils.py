"""Utility functions for Mythic Scribe."""

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "{name}:{line} - {message}"
        ),
    )
    logger.debug(f"Logging configured at {level.upper()}")
