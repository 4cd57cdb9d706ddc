"""Minimal logging helpers for prosescope.

Example:
    >>> from prosescope.log import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("flushing region")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger namespaced under ``prosescope.``."""
    if not (name == "prosescope" or name.startswith("prosescope.")):
        name = f"prosescope.{name}"
    return logging.getLogger(name)
