"""
Keyword group detection inside a day record.

A group is a sub-tree that looks like it holds a set of named items under a
keyword-matching label, e.g. a meal object {"meal": "Lunch", "stations": [...]}.
The test is deliberately permissive; ItemExtractor's minimum yield decides
whether a group is real.
"""

import re
from typing import Any, List

from menumine.utils.json_tree import DEFAULT_MAX_DEPTH, is_plain_object, iter_nodes


def has_string_value_matching(obj: dict, keyword: re.Pattern) -> bool:
    """True if any string-valued field matches the keyword."""
    return any(isinstance(v, str) and keyword.search(v) for v in obj.values())


def has_non_empty_array_value(obj: dict) -> bool:
    """True if any field holds a non-empty array."""
    return any(isinstance(v, list) and len(v) > 0 for v in obj.values())


def is_group(node: Any, keyword: re.Pattern) -> bool:
    """Object with a keyword-matching string field and a non-empty array field."""
    return (
        is_plain_object(node)
        and has_string_value_matching(node, keyword)
        and has_non_empty_array_value(node)
    )


def keyed_groups(obj: dict, keyword: re.Pattern) -> List[list]:
    """
    Non-empty arrays stored under keyword-matching keys.

    Covers shapes like {"Lunch": [...], "Breakfast": [...]} where the label is
    the key rather than a value.
    """
    return [
        value
        for key, value in obj.items()
        if isinstance(value, list) and value and keyword.search(str(key))
    ]


def find_groups(day_value: Any, keyword: re.Pattern, max_depth: int = DEFAULT_MAX_DEPTH) -> List[Any]:
    """
    Find candidate groups within a day record, in document order.

    Args:
        day_value: The day's JSON value
        keyword: Compiled case-insensitive keyword pattern
        max_depth: Traversal depth cap

    Returns:
        Group nodes: matching objects, and arrays under matching keys
    """
    groups = []

    for node in iter_nodes(day_value, max_depth=max_depth):
        if not is_plain_object(node):
            continue
        if is_group(node, keyword):
            groups.append(node)
        groups.extend(keyed_groups(node, keyword))

    return groups
