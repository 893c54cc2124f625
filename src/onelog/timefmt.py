"""Timestamp layouts: ``strftime`` patterns plus a few record-friendly directives.

Extra directives, expanded before ``strftime`` sees the layout:

=====  ==========================================================
``%L``  milliseconds, zero-padded to 3 digits
``%l``  hour on the 12-hour clock, no padding (``9``, ``12``)
``%P``  ``am`` / ``pm``, lowercase
``%o``  short UTC offset: ``Z`` at UTC, else ``-04`` or ``+0530``
=====  ==========================================================

``%%`` is still a literal percent sign.
"""

import re
from collections.abc import Callable
from datetime import datetime, timedelta

_DIRECTIVE = re.compile(r"%[%LlPo]")

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current wall-clock time as an aware datetime in the local zone."""
    return datetime.now().astimezone()


def short_offset(offset: timedelta) -> str:
    """Render a UTC offset as ``Z``, ``±hh`` or ``±hhmm``."""
    if not offset:
        return "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    hours, minutes = divmod(minutes, 60)
    if minutes:
        return f"{sign}{hours:02d}{minutes:02d}"
    return f"{sign}{hours:02d}"


def validate_layout(layout: str) -> str:
    """Return ``layout`` unchanged, or raise ``ValueError`` if it is unusable."""
    if not layout:
        raise ValueError("time layout must not be empty")
    stripped = layout.replace("%%", "")
    if stripped.endswith("%"):
        raise ValueError(f"time layout ends with a dangling '%': {layout!r}")
    return layout


def format_timestamp(moment: datetime, layout: str) -> str:
    """Format ``moment`` with ``layout``. Naive datetimes are taken as local time."""
    if moment.tzinfo is None:
        moment = moment.astimezone()

    def _expand(match: re.Match[str]) -> str:
        directive = match.group(0)[1]
        if directive == "%":
            return "%%"
        if directive == "L":
            return f"{moment.microsecond // 1000:03d}"
        if directive == "l":
            return str(moment.hour % 12 or 12)
        if directive == "P":
            return "am" if moment.hour < 12 else "pm"
        return short_offset(moment.utcoffset() or timedelta(0))

    return moment.strftime(_DIRECTIVE.sub(_expand, layout))
