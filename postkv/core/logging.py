"""
Logging setup for the service and the sync client.

Both entry points log to stdout, and to LOG_FILE when set. Chatty client
libraries (the Redis and HTTP clients, the server) are held at WARNING
so request-level lines from postkv stay readable.
"""

import logging
import sys

from postkv.core.config import settings


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger from settings.

    Safe to call more than once; existing root handlers are replaced.

    Args:
        level: Overrides settings.LOG_LEVEL (the sync client passes its own)
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper()))
    root.handlers.clear()

    formatter = logging.Formatter(settings.LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in settings.LOG_QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
