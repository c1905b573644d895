"""Logging for the expense tracker.

``configure_logging`` is called once by the app entrypoint. Other modules only
call ``get_logger("expense_tracker.<module>")`` and never attach handlers.
"""

import logging
import os
import sys

ROOT_LOGGER = "expense_tracker"
LEVEL_ENV = "EXPENSE_TRACKER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def _level_from_name(level):
    if isinstance(level, int):
        return level
    if not isinstance(level, str) or not level.strip():
        return None
    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    numeric = getattr(logging, level, None)
    return numeric if isinstance(numeric, int) else None


def parse_level(level):
    if level is None:
        level = os.getenv(LEVEL_ENV)
    numeric = _level_from_name(level)
    return logging.INFO if numeric is None else numeric


def configure_logging(level=None, fmt=None, stream=None):
    global _configured
    if _configured:
        return

    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    numeric = parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def get_logger(name):
    root = logging.getLogger(ROOT_LOGGER)
    if not _configured and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
