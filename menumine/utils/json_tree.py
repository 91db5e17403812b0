"""
Iterative traversal over parsed JSON value trees.

Documents arrive from third parties with no contractual shape, so every
traversal in the project goes through these helpers instead of recursion.
Nodes are yielded in pre-order, in document order: dict values in insertion
order, list elements by index.
"""

import json
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")

# Parsed JSON is acyclic; the depth cap only bounds worst-case cost
DEFAULT_MAX_DEPTH = 4000


class TreeDepthExceeded(ValueError):
    """Raised when a document nests deeper than the traversal cap."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"JSON tree nests deeper than {max_depth} levels")


def to_compact_json(value: Any) -> str:
    """Serialize without whitespace or ASCII escaping, the way payloads go on the wire."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def is_plain_object(value: Any) -> bool:
    """True for JSON objects (dicts), False for arrays and scalars."""
    return isinstance(value, dict)


def is_container(value: Any) -> bool:
    """True for JSON objects and arrays."""
    return isinstance(value, (dict, list))


def first_by_keys(
    record: Any, keys: Iterable[str], convert: Callable[[Any], Optional[T]]
) -> Optional[T]:
    """
    Ordered key lookup: the first listed key whose value converts wins.

    Args:
        record: JSON object to look into (anything else yields None)
        keys: Candidate keys, highest priority first
        convert: Returns the converted value, or None to try the next key

    Returns:
        First successful conversion, or None

    Example:
        >>> first_by_keys({"b": "x", "a": ""}, ["a", "b"], lambda v: v or None)
        'x'
    """
    if not isinstance(record, dict):
        return None

    for key in keys:
        if key in record:
            converted = convert(record[key])
            if converted is not None:
                return converted
    return None


def first_by_values(record: Any, convert: Callable[[Any], Optional[T]]) -> Optional[T]:
    """First successful conversion among an object's immediate values, in key order."""
    if not isinstance(record, dict):
        return None

    for value in record.values():
        converted = convert(value)
        if converted is not None:
            return converted
    return None


def _children(node: Any) -> list:
    if isinstance(node, dict):
        return list(node.values())
    if isinstance(node, list):
        return node
    return []


def iter_nodes(root: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[Any]:
    """
    Yield every node of a JSON tree exactly once, root first.

    Uses an explicit work-stack so arbitrarily deep documents never hit the
    interpreter's recursion limit.

    Args:
        root: Parsed JSON value
        max_depth: Maximum nesting level before giving up (root is level 0)

    Yields:
        Each node in pre-order, children in their defined order

    Raises:
        TreeDepthExceeded: If the tree is deeper than max_depth

    Example:
        >>> list(iter_nodes({"a": [1, 2]}))
        [{'a': [1, 2]}, [1, 2], 1, 2]
    """
    stack = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            raise TreeDepthExceeded(max_depth)

        yield node

        children = _children(node)
        # Reversed push so pop() visits children in document order
        for child in reversed(children):
            stack.append((child, depth + 1))


def scan(
    root: Any, predicate: Callable[[Any], bool], max_depth: int = DEFAULT_MAX_DEPTH
) -> Iterator[Any]:
    """
    Lazily yield the nodes of a JSON tree that satisfy predicate.

    Args:
        root: Parsed JSON value
        predicate: Function deciding whether a node is yielded
        max_depth: Maximum nesting level before giving up

    Yields:
        Matching nodes in pre-order document order
    """
    for node in iter_nodes(root, max_depth=max_depth):
        if predicate(node):
            yield node
