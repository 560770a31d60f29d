"""
Pipeline - Content Nodes

Tagging of the JSON-like trees found in story content.
"""

from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Shape of a content node."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


class _Missing:
    """Marker for a path that does not resolve (JSON ``null`` is a value)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def kind_of(node: Any) -> NodeKind:
    """Return the tag of a content node."""
    if isinstance(node, dict):
        return NodeKind.MAPPING
    if isinstance(node, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def is_index(segment: str) -> bool:
    """True for a path segment made only of ASCII digits."""
    return segment.isascii() and segment.isdigit()
