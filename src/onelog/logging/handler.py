"""Logging handler that feeds stdlib log records into a LogAggregator."""

import logging

from onelog.aggregator import LogAggregator
from onelog.constants import Level
from onelog.logging.formatter import level_for
from onelog.logging.setup import LIBRARY_LOGGER


class AggregatorHandler(logging.Handler):
    """Collect log records into the aggregator for the current unit of work.

    INFO and below become info messages, WARNING becomes a warning, and
    ERROR or above records the message together with the attached exception
    (or the message itself when there is none) as the record's error.

    Messages are always stored escaped. With ``include_logger_name`` each
    message is prefixed with ``"<logger name>: "``.

    Rebind with :meth:`bind` at the start of each unit of work; while
    unbound, records are dropped.
    """

    def __init__(
        self,
        aggregator: LogAggregator | None = None,
        *,
        level: int = logging.NOTSET,
        include_logger_name: bool = True,
    ) -> None:
        super().__init__(level)
        self._aggregator = aggregator
        self._include_logger_name = include_logger_name

    @property
    def aggregator(self) -> LogAggregator | None:
        return self._aggregator

    def bind(self, aggregator: LogAggregator | None) -> None:
        self._aggregator = aggregator

    def emit(self, record: logging.LogRecord) -> None:
        aggregator = self._aggregator
        # The aggregator's own diagnostics would re-enter its lock.
        if aggregator is None or record.name.partition(".")[0] == LIBRARY_LOGGER:
            return

        try:
            message = self.format(record) if self.formatter else record.getMessage()
            prefix = f"{record.name}: " if self._include_logger_name else ""
            level = level_for(record.levelno)

            if level is Level.WARN:
                aggregator.record_warn(prefix, message)
                return

            if level is Level.ERROR:
                exc = record.exc_info[1] if record.exc_info else None
                err = exc if exc is not None else record.getMessage()
                aggregator.record_failure(err, prefix, message)
                return

            aggregator.record_info(prefix, message)
        except Exception:
            self.handleError(record)
