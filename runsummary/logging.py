"""Package logging for runsummary.

Modules log through children of the ``runsummary`` logger, obtained with
:func:`get_logger`. That logger owns a single handler writing to stderr:
stdout is reserved for the rendered summary and the JSON export, so
``runsummary report run.yaml > summary.txt`` never captures log records.
"""

import logging
import sys
from typing import IO, Optional

PACKAGE_LOGGER_NAME = "runsummary"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def setup_root_logger(
    level: int = logging.INFO, stream: Optional[IO[str]] = None
) -> logging.Handler:
    """Attach the package handler if it is not attached yet, and return it.

    Args:
        level: Initial level of the package logger.
        stream: Destination of log records. Defaults to ``sys.stderr`` as it is
            at call time.

    Returns:
        The package handler. Calls after the first one return it unchanged
        until :func:`reset_logging` detaches it.
    """
    global _handler

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr if stream is None else stream)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        package_logger.setLevel(level)
        package_logger.addHandler(_handler)
    return _handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for module ``name`` (normally ``__name__``)."""
    setup_root_logger()
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and of its handler."""
    handler = setup_root_logger()
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)
    handler.setLevel(level)


def reset_logging() -> None:
    """Detach the package handler and clear the package level."""
    global _handler

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)
        _handler = None
    package_logger.setLevel(logging.NOTSET)


setup_root_logger()
