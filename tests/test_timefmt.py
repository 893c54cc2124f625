"""Tests for timestamp layouts."""

from datetime import datetime, timedelta, timezone

import pytest

from onelog.constants import DEFAULT_TIME_LAYOUT
from onelog.timefmt import format_timestamp, local_now, short_offset, validate_layout

from conftest import FIXED_MOMENT, FIXED_TIME


def test_default_layout() -> None:
    assert format_timestamp(FIXED_MOMENT, DEFAULT_TIME_LAYOUT) == FIXED_TIME


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(0, "12am"), (9, "9am"), (11, "11am"), (12, "12pm"), (13, "1pm"), (23, "11pm")],
)
def test_twelve_hour_clock(hour: int, expected: str) -> None:
    moment = datetime(2024, 1, 2, hour, 5, tzinfo=timezone.utc)
    assert format_timestamp(moment, "%l%P") == expected


def test_milliseconds_are_zero_padded() -> None:
    moment = datetime(2024, 1, 2, 3, 4, 5, 7000, tzinfo=timezone.utc)
    assert format_timestamp(moment, "%S.%L") == "05.007"


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (timedelta(0), "Z"),
        (timedelta(hours=-4), "-04"),
        (timedelta(hours=2), "+02"),
        (timedelta(hours=5, minutes=30), "+0530"),
        (timedelta(hours=-3, minutes=-30), "-0330"),
    ],
)
def test_short_offset(offset: timedelta, expected: str) -> None:
    assert short_offset(offset) == expected
    moment = datetime(2024, 1, 2, tzinfo=timezone(offset))
    assert format_timestamp(moment, "%o") == expected


def test_plain_strftime_directives_pass_through() -> None:
    moment = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    assert format_timestamp(moment, "%Y-%m-%dT%H:%M:%S") == "2024-01-02T15:04:05"


def test_literal_percent() -> None:
    moment = datetime(2024, 1, 2, tzinfo=timezone.utc)
    assert format_timestamp(moment, "100%% %%L") == "100% %L"


def test_naive_datetime_is_local() -> None:
    naive = datetime(2024, 6, 1, 12, 30)
    assert format_timestamp(naive, "%o") == format_timestamp(naive.astimezone(), "%o")


def test_local_now_is_aware() -> None:
    assert local_now().tzinfo is not None


@pytest.mark.parametrize("layout", ["", "%Y%", "50%%%"])
def test_invalid_layouts(layout: str) -> None:
    with pytest.raises(ValueError):
        validate_layout(layout)


def test_valid_layout_returned() -> None:
    assert validate_layout("100%%") == "100%%"
