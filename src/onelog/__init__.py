"""Structured per-request log records, built incrementally and emitted once."""

from onelog.aggregator import CustomLogFunc, LogAggregator
from onelog.constants import ERR_KEY, LEVEL_KEY, MSG_KEY, TIME_KEY, Level, NodeKind
from onelog.document import Array, Dict, Group, Node, Pair
from onelog.escape import escape
from onelog.exceptions import FieldNotFoundError, FieldTypeError, OnelogError, RenderError
from onelog.gate import OneShotGate
from onelog.renderers import CommandRenderer, IndentRenderer, Renderer
from onelog.settings import OnelogSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    "Array",
    "CommandRenderer",
    "CustomLogFunc",
    "Dict",
    "ERR_KEY",
    "FieldNotFoundError",
    "FieldTypeError",
    "Group",
    "IndentRenderer",
    "LEVEL_KEY",
    "Level",
    "LogAggregator",
    "MSG_KEY",
    "Node",
    "NodeKind",
    "OneShotGate",
    "OnelogError",
    "OnelogSettings",
    "Pair",
    "RenderError",
    "Renderer",
    "TIME_KEY",
    "escape",
    "get_settings",
]
