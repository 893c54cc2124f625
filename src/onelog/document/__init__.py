"""Document model and its serializer."""

from onelog.document.nodes import Array, Dict, Group, Node, Pair
from onelog.document.serializer import (
    serialize,
    serialize_array,
    serialize_dict,
    serialize_group,
    serialize_pair,
)

__all__ = [
    "Array",
    "Dict",
    "Group",
    "Node",
    "Pair",
    "serialize",
    "serialize_array",
    "serialize_dict",
    "serialize_group",
    "serialize_pair",
]
