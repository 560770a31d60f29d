"""
Pipeline - Tree Matcher

Depth-first predicate search over story content trees.

Both matchers keep a visited set keyed by object identity, so a tree that
refers back to itself terminates: a node that was already seen is a miss
for that branch. An explicit stack replaces recursion, which keeps very
deep trees clear of the interpreter recursion limit.
"""

from typing import Any, Callable, Optional

from storyblok_mcp.pipeline.nodes import NodeKind, kind_of

COMPONENT_FIELD = "component"


def component_of(content: Any) -> Optional[str]:
    """Component name of a content mapping, or None if absent or not a string."""
    if not isinstance(content, dict):
        return None
    name = content.get(COMPONENT_FIELD)
    return name if isinstance(name, str) else None


def any_node(tree: Any, predicate: Callable[[Any, NodeKind], bool]) -> bool:
    """
    Return True as soon as ``predicate`` holds for a node of ``tree``.

    Args:
        tree: Root node (scalar, list or dict)
        predicate: Called with each node and its kind

    Returns:
        Whether any node matched
    """
    if tree is None:
        return False

    visited = set()
    stack = [tree]
    while stack:
        node = stack.pop()
        kind = kind_of(node)

        if kind is not NodeKind.SCALAR:
            if id(node) in visited:
                continue
            visited.add(id(node))

        if predicate(node, kind):
            return True

        if kind is NodeKind.MAPPING:
            children = list(node.values())
        elif kind is NodeKind.SEQUENCE:
            children = list(node)
        else:
            continue
        # Reversed so the leftmost child is visited first
        stack.extend(reversed(children))

    return False


def component_usage_match(
    tree: Any,
    target: str,
    type_field: str = COMPONENT_FIELD,
) -> bool:
    """
    Check whether any mapping in ``tree`` is a component of type ``target``.

    Args:
        tree: Story content (or any sub-tree)
        target: Component technical name
        type_field: Field holding the component name

    Returns:
        True if a mapping with ``type_field == target`` exists at any depth
    """
    def is_target(node: Any, kind: NodeKind) -> bool:
        return kind is NodeKind.MAPPING and node.get(type_field) == target

    return any_node(tree, is_target)


def deep_text_match(tree: Any, query: str, case_insensitive: bool = True) -> bool:
    """
    Check whether any string leaf in ``tree`` contains ``query``.

    Numbers, booleans and null never match.

    Args:
        tree: Story content (or any sub-tree)
        query: Substring to look for
        case_insensitive: Compare case-folded text (default True)

    Returns:
        True if some string leaf contains the query
    """
    needle = query.lower() if case_insensitive else query

    def contains(node: Any, kind: NodeKind) -> bool:
        if kind is not NodeKind.SCALAR or not isinstance(node, str):
            return False
        haystack = node.lower() if case_insensitive else node
        return needle in haystack

    return any_node(tree, contains)


def text_contains(value: Any, query: str, case_insensitive: bool = True) -> bool:
    """Flat check: ``value`` is a string containing ``query``."""
    if not isinstance(value, str):
        return False
    if case_insensitive:
        return query.lower() in value.lower()
    return query in value
