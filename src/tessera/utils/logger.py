"""Logging helpers for Tessera.

Wraps the standard library logging so every logger lives under the
``tessera.`` namespace. The library never installs handlers; applications
configure logging as they see fit.

Example:
    >>> from tessera.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiled template with %d parts", 3)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance prefixed with "tessera."

    Example:
        >>> get_logger("compiler").name
        'tessera.compiler'
        >>> get_logger("tessera.parts").name
        'tessera.parts'
    """
    if not (name == "tessera" or name.startswith("tessera.")):
        name = f"tessera.{name}"
    return logging.getLogger(name)
