"""Levels, reserved record keys, and formatting defaults."""

import enum


class Level(enum.StrEnum):
    """Severity of a whole record.

    Ordered INFO < WARN < ERROR. Compare with :attr:`severity`, not with the
    string values.
    """

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def at_least(self, other: "Level") -> bool:
        return self.severity >= other.severity


_SEVERITY: dict[Level, int] = {Level.INFO: 0, Level.WARN: 1, Level.ERROR: 2}


class NodeKind(enum.StrEnum):
    """Keyed document node kinds that can be stored in a record."""

    PAIR = "pair"
    ARRAY = "array"
    GROUP = "group"


# --- Reserved record keys ---

TIME_KEY = "time"
LEVEL_KEY = "level"
MSG_KEY = "msgs"
ERR_KEY = "error"

# Keys serialized first, in this order, ahead of the sorted remainder.
LEADING_KEYS = (TIME_KEY, LEVEL_KEY, ERR_KEY)

# --- Serialization tokens ---

OPEN_BRACE = "{"
CLOSE_BRACE = "}"
OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
QUOTE = '"'
ENTRY_SEPARATOR = ", "
KEY_SEPARATOR = ": "
LINE_TERMINATOR = "\n"

# --- Defaults ---

# Renders e.g. "2023-08-10 9:00:41.553pm -04"; see onelog.timefmt for %l, %L, %P, %o.
DEFAULT_TIME_LAYOUT = "%Y-%m-%d %l:%M:%S.%L%P %o"
DEFAULT_ENCODING = "utf-8"
DEFAULT_PRETTY_INDENT = 2
DEFAULT_PRETTY_COMMAND = ("jq", ".")
