import logging
import os
from typing import Union

LOG_LEVEL_ENV = "CHARSHEET_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: Union[int, str] = logging.INFO, debug: bool = False) -> int:
    """Pick the log level: CHARSHEET_LOG_LEVEL wins, then --debug, then ``level``.

    Unknown level names fall back to INFO.
    """
    name = os.getenv(LOG_LEVEL_ENV)
    if name:
        return getattr(logging, name.upper(), logging.INFO)
    if debug:
        return logging.DEBUG
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def configure_logging(level: Union[int, str] = logging.INFO, debug: bool = False) -> int:
    """Configure the root logger for command-line use and return the level applied."""
    resolved = resolve_level(level, debug)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    return resolved
