"""Document nodes: Pair, Array, Group and Dict.

``Pair``, ``Array`` and ``Group`` are keyed and carry a :class:`NodeKind`
tag. ``Dict`` has no key of its own; it is the map inside a ``Group`` and the
top-level record built at emission time.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import ClassVar

from onelog.constants import NodeKind
from onelog.document import serializer
from onelog.escape import escape_join


@dataclass(frozen=True, slots=True)
class Pair:
    """A key/value leaf. Immutable; store a new Pair to change the value."""

    key: str
    value: str

    kind: ClassVar[NodeKind] = NodeKind.PAIR

    def __str__(self) -> str:
        return serializer.serialize_pair(self)


@dataclass(slots=True)
class Array:
    """A keyed, append-only list of strings.

    Values added with :meth:`add` land in the raw bucket and are written as
    given. Values added with :meth:`add_safe` are quote-escaped on insertion
    and land in the escaped bucket. The raw bucket is always serialized
    first.
    """

    key: str
    _raw: list[str] = field(default_factory=list, repr=False)
    _escaped: list[str] = field(default_factory=list, repr=False)

    kind: ClassVar[NodeKind] = NodeKind.ARRAY

    @property
    def raw_values(self) -> tuple[str, ...]:
        return tuple(self._raw)

    @property
    def escaped_values(self) -> tuple[str, ...]:
        return tuple(self._escaped)

    def add(self, value: str) -> None:
        """Append ``value`` to the raw bucket, unescaped."""
        self._raw.append(value)

    def add_safe(self, fmt: str, *args: str) -> None:
        """Escape ``fmt`` and ``args``, concatenate, and append as one value."""
        self._escaped.append(escape_join(fmt, *args))

    def extend(self, values: Iterable[str]) -> None:
        """Append each of ``values`` to the raw bucket."""
        self._raw.extend(values)

    def copy(self) -> "Array":
        return Array(self.key, list(self._raw), list(self._escaped))

    def __len__(self) -> int:
        return len(self._raw) + len(self._escaped)

    def __iter__(self) -> Iterator[str]:
        yield from self._raw
        yield from self._escaped

    def __str__(self) -> str:
        return serializer.serialize_array(self)


class Dict:
    """Map of key to keyed node. Last write for a key wins."""

    __slots__ = ("_entries",)

    def __init__(self, nodes: Iterable["Node"] = ()) -> None:
        self._entries: dict[str, "Node"] = {}
        for node in nodes:
            self.set(node)

    def set(self, node: "Node") -> None:
        """Insert ``node`` under its own key, replacing any previous entry."""
        if not isinstance(node, (Pair, Array, Group)):
            raise TypeError(f"expected Pair, Array or Group, got {type(node).__name__}")
        self._entries[node.key] = node

    def set_pair(self, key: str, value: str) -> None:
        self._entries[key] = Pair(key, value)

    def get(self, key: str) -> "Node | None":
        return self._entries.get(key)

    def pop(self, key: str) -> "Node | None":
        return self._entries.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._entries)

    def __getitem__(self, key: str) -> "Node":
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Dict({list(self._entries.values())!r})"

    def __str__(self) -> str:
        return serializer.serialize_dict(self)


@dataclass(frozen=True, slots=True)
class Group:
    """A keyed wrapper around a :class:`Dict`, used for nesting."""

    key: str
    value: Dict = field(default_factory=Dict)

    kind: ClassVar[NodeKind] = NodeKind.GROUP

    def __str__(self) -> str:
        return serializer.serialize_group(self)


Node = Pair | Array | Group
