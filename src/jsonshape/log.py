"""Logging helpers for jsonshape."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "jsonshape"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the jsonshape hierarchy."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(*, verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """
    Attach a Rich handler to the jsonshape logger.
    Safe to call repeatedly; previous handlers are replaced.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
