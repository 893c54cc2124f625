"""Bridges between stdlib logging and onelog records."""

from onelog.logging.formatter import RecordFormatter
from onelog.logging.handler import AggregatorHandler
from onelog.logging.setup import configure_logging

__all__ = ["AggregatorHandler", "RecordFormatter", "configure_logging"]
