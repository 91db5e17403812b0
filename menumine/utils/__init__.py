"""
Shared utilities for MENUMINE.

Common functionality used across contexts:
- JSON tree traversal
- Text cleanup and truncation
- Calendar date helpers
- Logger setup
"""

from menumine.utils.json_tree import TreeDepthExceeded, is_plain_object, iter_nodes, scan
from menumine.utils.timestamp import add_days_iso, today_iso

__all__ = [
    "TreeDepthExceeded",
    "add_days_iso",
    "is_plain_object",
    "iter_nodes",
    "scan",
    "today_iso",
]
