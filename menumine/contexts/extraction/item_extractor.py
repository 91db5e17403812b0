"""
Named leaf item extraction from a keyword group.

An item is an object with a plausible name that is not a container. A
container holds an array whose first element is itself an object or array,
which signals a nested item list to descend into rather than a leaf.
"""

from typing import Any, Iterable, List, Optional

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.extraction.data_structures import ItemPair
from menumine.contexts.extraction.date_detector import looks_like_date
from menumine.contexts.extraction.logger import log_group_rejected
from menumine.contexts.extraction.patterns import NamePatterns
from menumine.utils.json_tree import first_by_keys, iter_nodes


def _non_blank(value: Any) -> Optional[str]:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return None


def get_first_string(obj: Any, keys: Iterable[str]) -> Optional[str]:
    """First non-blank string among the listed keys, trimmed."""
    return first_by_keys(obj, keys, _non_blank)


def is_container_node(obj: dict) -> bool:
    """True if any array field starts with an object or array."""
    return any(
        isinstance(v, list) and len(v) > 0 and isinstance(v[0], (dict, list))
        for v in obj.values()
    )


def is_valid_item_name(name: Optional[str], config: ExtractionConfig) -> bool:
    """
    Check that a cleaned name plausibly names an item.

    Rejects names outside the configured length bounds, names carrying a
    date, bare URLs and generic group labels ("Lunch", "Menu", ...).
    """
    if not name:
        return False

    name = name.strip()
    if not (config.name_min_chars <= len(name) <= config.name_max_chars):
        return False
    if looks_like_date(name):
        return False
    if NamePatterns.BARE_URL.match(name):
        return False
    if name.lower() in config.generic_name_set:
        return False
    return True


def extract_pairs(group: Any, config: ExtractionConfig) -> List[ItemPair]:
    """
    Extract unique (name, section) pairs from a group, in document order.

    Containers are never emitted, but their children are still visited and
    may qualify on their own.

    Args:
        group: Group node (object or array)
        config: Extraction config (name/section keys, validity bounds)

    Returns:
        Unique ItemPairs, first occurrence wins
    """
    pairs = []
    seen = set()

    for node in iter_nodes(group, max_depth=config.max_depth):
        if not isinstance(node, dict) or is_container_node(node):
            continue

        name = get_first_string(node, config.name_keys)
        if not is_valid_item_name(name, config):
            continue

        pair = ItemPair(name=name, section=get_first_string(node, config.section_keys))
        if pair.key not in seen:
            seen.add(pair.key)
            pairs.append(pair)

    return pairs


def first_qualifying_group(
    groups: Iterable[Any], config: ExtractionConfig, day: str = "", min_pairs: Optional[int] = None
) -> Optional[List[ItemPair]]:
    """
    Pairs of the first group that yields at least min_pairs items.

    Args:
        groups: Candidate groups in priority order
        config: Extraction config
        day: Day label for logging
        min_pairs: Minimum yield (defaults to config.min_group_pairs)

    Returns:
        The accepted group's pairs, or None if every group looks like noise
    """
    if min_pairs is None:
        min_pairs = config.min_group_pairs

    for group in groups:
        pairs = extract_pairs(group, config)
        if len(pairs) >= min_pairs:
            return pairs
        log_group_rejected(day, len(pairs), min_pairs)

    return None
