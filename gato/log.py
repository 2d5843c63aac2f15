"""Diagnostic logging setup."""

import sys

from loguru import logger


def setup_logging(debug: bool = False) -> None:
    """Send diagnostics to stderr.

    Only warnings and errors are shown unless debug is set.

    Args:
        debug: Enable debug-level records (git commands, model exit codes).
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
        colorize=None,
    )
