"""Logging helpers for Sangria.

Every module logs through a logger under the "sangria" namespace, so one
call to :func:`configure_logging` controls the whole package. The
indentation manager logs each state transition at DEBUG, prefixed with
the line number; stray closers and unreadable files are logged at
WARNING.

Example:
    >>> from sangria.utils.logger import get_logger
    >>> get_logger("sangria.driver").name
    'sangria.driver'
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "sangria"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the "sangria" namespace.

    Args:
        name: Logger name (typically __name__); names outside the
            namespace are prefixed with "sangria."

    Example:
        >>> get_logger("mymodule").name
        'sangria.mymodule'
    """
    if not (name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}.")):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send the package's log records to stderr.

    Args:
        verbose: Log every state transition (DEBUG) instead of warnings only

    Returns:
        The package's top-level logger.
    """
    logging.basicConfig(format=LOG_FORMAT)
    package_logger = logging.getLogger(ROOT_LOGGER)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return package_logger
