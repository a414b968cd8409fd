"""
Logging for the finance_tracker package.

The CLI calls configure_logging() once at startup. Library modules only call
get_logger(__name__) and never attach handlers of their own.
"""
import logging
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER = "finance_tracker"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False

def parse_level(level: Union[int, str, None]) -> int:
    """
    Turn a level name or number into a logging level.

    Args:
        level: e.g. "INFO", "10" or logging.DEBUG

    Returns:
        The numeric level, WARNING if the input isn't recognized
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelName(name)
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING

def configure_logging(level: Union[int, str, None] = None, stream: Optional[IO[str]] = None) -> None:
    """
    Send package logs to a stream. Only the first call has an effect.

    Args:
        level: Level name or number (see parse_level)
        stream: Where to write, defaults to stderr
    """
    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(parse_level(level))
    logger.propagate = False

    _configured = True

def get_logger(name: str) -> logging.Logger:
    """Return a module logger; silent until configure_logging() runs"""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
