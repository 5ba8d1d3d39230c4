from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "compmap"
LOG_LEVEL_ENV = "COMPMAP_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root logger."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int | str | None = None, *, rich: bool = True
) -> logging.Logger:
    """
    Attach a single console handler to the package logger.

    The level falls back to the COMPMAP_LOG_LEVEL environment variable, then
    WARNING. Calling this again swaps the handler instead of adding another.
    """
    global _handler

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)

    if rich:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    root.setLevel(level)
    _handler = handler
    return root
