"""Deterministic stringification of document nodes.

Each ``serialize_*`` function collects fragments into one list and joins it
once, so nested groups do not build intermediate strings per level.

Ordering rules:

* a dict emits ``time``, ``level`` and ``error`` first (when present, in that
  order), then every other key sorted ascending;
* an array emits its raw values before its pre-escaped values, each bucket in
  insertion order.

Pair values and raw array values are quoted but never escaped here; escape
them before they reach a node if they may contain quotes.
"""

from typing import TYPE_CHECKING

from onelog.constants import (
    CLOSE_BRACE,
    CLOSE_BRACKET,
    ENTRY_SEPARATOR,
    KEY_SEPARATOR,
    LEADING_KEYS,
    OPEN_BRACE,
    OPEN_BRACKET,
    QUOTE,
    NodeKind,
)

if TYPE_CHECKING:
    from onelog.document.nodes import Array, Dict, Group, Node, Pair


def serialize_pair(pair: "Pair") -> str:
    """``"key": "value"``."""
    parts: list[str] = []
    _write_pair(parts, pair)
    return "".join(parts)


def serialize_array(array: "Array") -> str:
    """``"key": ["raw", ..., "escaped", ...]``; ``"key": []`` when empty."""
    parts: list[str] = []
    _write_array(parts, array)
    return "".join(parts)


def serialize_group(group: "Group") -> str:
    """``"key": {...}``."""
    parts: list[str] = []
    _write_group(parts, group)
    return "".join(parts)


def serialize_dict(dct: "Dict") -> str:
    """``{...}`` with leading keys first; ``{}`` when empty."""
    parts: list[str] = []
    _write_dict(parts, dct)
    return "".join(parts)


def serialize(node: "Node") -> str:
    """Serialize any keyed node by dispatching on its kind."""
    parts: list[str] = []
    _write_node(parts, node)
    return "".join(parts)


def ordered_keys(keys: "list[str] | set[str]") -> list[str]:
    """Return ``keys`` in record order: leading keys, then the rest sorted."""
    present = set(keys)
    leading = [k for k in LEADING_KEYS if k in present]
    rest = sorted(present.difference(LEADING_KEYS))
    return leading + rest


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def _write_key(parts: list[str], key: str) -> None:
    parts += (QUOTE, key, QUOTE, KEY_SEPARATOR)


def _write_pair(parts: list[str], pair: "Pair") -> None:
    _write_key(parts, pair.key)
    parts += (QUOTE, pair.value, QUOTE)


def _write_array(parts: list[str], array: "Array") -> None:
    _write_key(parts, array.key)
    parts.append(OPEN_BRACKET)
    first = True
    for value in (*array.raw_values, *array.escaped_values):
        if not first:
            parts.append(ENTRY_SEPARATOR)
        first = False
        parts += (QUOTE, value, QUOTE)
    parts.append(CLOSE_BRACKET)


def _write_group(parts: list[str], group: "Group") -> None:
    _write_key(parts, group.key)
    _write_dict(parts, group.value)


def _write_dict(parts: list[str], dct: "Dict") -> None:
    parts.append(OPEN_BRACE)
    first = True
    for key in ordered_keys(dct.keys()):
        if not first:
            parts.append(ENTRY_SEPARATOR)
        first = False
        _write_node(parts, dct[key])
    parts.append(CLOSE_BRACE)


def _write_node(parts: list[str], node: "Node") -> None:
    if node.kind is NodeKind.PAIR:
        _write_pair(parts, node)  # type: ignore[arg-type]
    elif node.kind is NodeKind.ARRAY:
        _write_array(parts, node)  # type: ignore[arg-type]
    elif node.kind is NodeKind.GROUP:
        _write_group(parts, node)  # type: ignore[arg-type]
    else:
        raise TypeError(f"cannot serialize node of kind {node.kind!r}")
