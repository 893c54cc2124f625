"""Shared fixtures for onelog tests."""

import io
import threading
from datetime import datetime, timedelta, timezone

import pytest

from onelog.aggregator import LogAggregator

# 2023-08-10 21:00:41.553 at UTC-4, rendered by the default layout as below.
FIXED_MOMENT = datetime(2023, 8, 10, 21, 0, 41, 553000, tzinfo=timezone(timedelta(hours=-4)))
FIXED_TIME = "2023-08-10 9:00:41.553pm -04"


class CountingSink:
    """Byte sink that records every write call separately."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.writes: list[bytes] = []

    def write(self, data: bytes) -> int:
        with self._lock:
            self.writes.append(bytes(data))
        return len(data)

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)


def fixed_clock() -> datetime:
    return FIXED_MOMENT


@pytest.fixture
def sink() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def counting_sink() -> CountingSink:
    return CountingSink()


@pytest.fixture
def log(sink: io.BytesIO) -> LogAggregator:
    return LogAggregator(output=sink, clock=fixed_clock)


def emitted_line(sink: io.BytesIO) -> str:
    """The single line written to ``sink``, without its terminator."""
    text = sink.getvalue().decode("utf-8")
    assert text.endswith("\n")
    assert text.count("\n") == 1
    return text[:-1]
