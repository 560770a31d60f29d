"""
Pipeline - Path Accessor

Dot-path reads and writes on nested story data, e.g. ``content.body.0.component``.
"""

from typing import Any, List

from storyblok_mcp.pipeline.nodes import MISSING, NodeKind, is_index, kind_of


def split_path(path: str) -> List[str]:
    """Split a dot path into its segments."""
    return path.split(".")


def get_path(tree: Any, path: str) -> Any:
    """
    Read the value at ``path``.

    Digit-only segments index into sequences; other segments are mapping
    keys. Anything that does not resolve gives ``MISSING`` instead of an
    error.

    Args:
        tree: Nested dicts/lists
        path: Dot-separated path

    Returns:
        The value found, or MISSING
    """
    current = tree
    for segment in split_path(path):
        kind = kind_of(current)
        if kind is NodeKind.SEQUENCE:
            if not is_index(segment):
                return MISSING
            index = int(segment)
            if index >= len(current):
                return MISSING
            current = current[index]
        elif kind is NodeKind.MAPPING:
            if segment not in current:
                return MISSING
            current = current[segment]
        else:
            return MISSING
    return current


def _container_for(segment: str) -> Any:
    return [] if is_index(segment) else {}


def _fits(node: Any, segment: str) -> bool:
    kind = kind_of(node)
    if kind is NodeKind.MAPPING:
        return True
    return kind is NodeKind.SEQUENCE and isinstance(node, list) and is_index(segment)


def _assign(node: Any, segment: str, value: Any) -> None:
    if isinstance(node, list):
        index = int(segment)
        if index >= len(node):
            node.extend([None] * (index + 1 - len(node)))
        node[index] = value
    else:
        node[segment] = value


def _read(node: Any, segment: str) -> Any:
    if isinstance(node, list):
        index = int(segment)
        return node[index] if index < len(node) else MISSING
    return node.get(segment, MISSING)


def set_path(tree: Any, path: str, value: Any) -> None:
    """
    Write ``value`` at ``path``, creating intermediate containers.

    A list is created when the next segment is numeric, a dict otherwise.
    Intermediate values of the wrong shape are replaced. Writing into a
    root that cannot hold the first segment is a no-op.

    Args:
        tree: Root dict or list, mutated in place
        path: Dot-separated path
        value: Value to store
    """
    segments = split_path(path)
    if not _fits(tree, segments[0]):
        return

    current = tree
    for segment, next_segment in zip(segments, segments[1:]):
        child = _read(current, segment)
        if child is MISSING or not _fits(child, next_segment):
            child = _container_for(next_segment)
            _assign(current, segment, child)
        current = child

    _assign(current, segments[-1], value)
