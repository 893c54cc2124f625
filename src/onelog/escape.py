"""Quote-only escaping for string values embedded in records."""

from onelog.constants import QUOTE

_ESCAPED_QUOTE = "\\" + QUOTE


def escape(value: str) -> str:
    """Return ``value`` with every double quote preceded by a backslash.

    Backslashes are passed through untouched, so an input such as ``a\\"b``
    becomes ``a\\\\"b`` and a strict JSON parser will read the quote as the
    end of the string. Known defect; callers needing full JSON escaping must
    escape backslashes themselves.
    """
    return value.replace(QUOTE, _ESCAPED_QUOTE)


def escape_join(fmt: str, *args: str) -> str:
    """Escape ``fmt`` and each of ``args`` and concatenate them."""
    return "".join(escape(part) for part in (fmt, *args))
