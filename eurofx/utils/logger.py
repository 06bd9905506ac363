"""Logging utilities for the eurofx package."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER: Optional[logging.Logger] = None
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = "eurofx", *, level: int = logging.INFO) -> logging.Logger:
    """Return a named logger, installing the package format on first use.

    Only the first call configures the root handler; later calls simply hand
    back ``logging.getLogger(name)`` so applications that configure logging
    themselves keep full control.
    """
    global _LOGGER
    if _LOGGER is None:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        _LOGGER = logging.getLogger("eurofx")
    return logging.getLogger(name)
