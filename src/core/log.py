"""Small logging helpers to standardize logger names and configuration.

All project loggers live under the 'text_merge' namespace. Output goes to
stderr because stdout carries the MCP stdio transport.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

BASE_LOGGER_NAME = "text_merge"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the base 'text_merge' logger once and return it."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_text_merge_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._text_merge_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger ('text_merge.<name>')."""
    if name.startswith(BASE_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER_NAME}.{name}")
