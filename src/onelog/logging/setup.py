"""Configuration of onelog's own diagnostic logging."""

import logging
import sys
from typing import TextIO

from onelog.constants import DEFAULT_TIME_LAYOUT
from onelog.logging.formatter import RecordFormatter

LIBRARY_LOGGER = "onelog"


def configure_logging(
    level: int = logging.INFO,
    *,
    stream: TextIO | None = None,
    time_layout: str = DEFAULT_TIME_LAYOUT,
) -> logging.Logger:
    """Send the library's own log output to ``stream`` as single-line records."""
    lib_logger = logging.getLogger(LIBRARY_LOGGER)
    lib_logger.setLevel(level)
    for handler in lib_logger.handlers[:]:
        lib_logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(RecordFormatter(time_layout=time_layout))
    lib_logger.addHandler(handler)
    return lib_logger
