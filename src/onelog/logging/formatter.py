"""Formatter that renders stdlib log records in the onelog record format."""

import logging
from datetime import datetime

from onelog.constants import DEFAULT_TIME_LAYOUT, ERR_KEY, LEVEL_KEY, MSG_KEY, TIME_KEY, Level
from onelog.document import Array, Dict, serialize_dict
from onelog.escape import escape
from onelog.timefmt import format_timestamp, validate_layout

LOGGER_KEY = "logger"


def level_for(levelno: int) -> Level:
    """Map a stdlib logging level number onto the three record levels."""
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    return Level.INFO


class RecordFormatter(logging.Formatter):
    """Emit each log record as a single-line record.

    Output format::

        {"time": "...", "level": "WARN", "error": "...",
         "logger": "app.main", "msgs": ["..."]}

    ``error`` appears only when the record carries an exception.
    """

    def __init__(self, time_layout: str = DEFAULT_TIME_LAYOUT) -> None:
        super().__init__()
        self._time_layout = validate_layout(time_layout)

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created).astimezone()
        entry = Dict()
        entry.set_pair(TIME_KEY, format_timestamp(created, self._time_layout))
        entry.set_pair(LEVEL_KEY, level_for(record.levelno).value)
        entry.set_pair(LOGGER_KEY, escape(record.name))

        msgs = Array(MSG_KEY)
        msgs.add_safe(record.getMessage())
        entry.set(msgs)

        if record.exc_info and record.exc_info[1] is not None:
            entry.set_pair(ERR_KEY, escape(str(record.exc_info[1])))

        return serialize_dict(entry)
