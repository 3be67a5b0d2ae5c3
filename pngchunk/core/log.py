"""Logging setup for the pngchunk command line.

Library modules only call logging.getLogger(__name__); handlers are
attached here, once, by the CLI entry point.
"""

import logging
import sys

LOGGER_NAME = 'pngchunk'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
HANDLER_NAME = 'pngchunk-stderr'


def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the package logger to write to stderr.

    Unknown level names fall back to WARNING. Calling this again only
    updates the level of the stderr handler; no duplicate is added
    and handlers attached by others are left alone.
    """
    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    handler = next((h for h in logger.handlers if h.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    handler.setLevel(resolved)

    return logger
