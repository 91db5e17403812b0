"""
Structured extraction from day-map documents.

A day-map is an object keyed by date-like strings, each value holding that
day's record:

    {"02/10/2026": {"Entrees": [{"name": "Pizza", "meal": "Lunch", ...}]}}

Days before the start date are skipped. For each remaining day, in date order:

1. Item-level pass: items in the day's top-level arrays whose own string
   values match the keyword. Such items may list several sections at once.
2. Group pass: GroupFilter + ItemExtractor over the day, gated by the
   minimum group yield.
"""

from typing import Any, List, Optional

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.extraction.data_structures import ExtractionResult, ItemPair
from menumine.contexts.extraction.day_index import index_date_map, iter_on_or_after
from menumine.contexts.extraction.group_filter import find_groups, has_string_value_matching
from menumine.contexts.extraction.item_extractor import (
    first_qualifying_group,
    get_first_string,
    is_valid_item_name,
)
from menumine.contexts.extraction.logger import log_day_result
from menumine.contexts.extraction.section_aggregator import aggregate


def item_sections(item: dict, config: ExtractionConfig) -> List[Optional[str]]:
    """
    Sections an item is listed under.

    Looks for an array of section objects first, then a comma-separated
    section string. Items with neither are listed once, without a section.
    """
    for key in config.multi_section_list_keys:
        entries = item.get(key)
        if isinstance(entries, list):
            names = [get_first_string(e, ("name",)) for e in entries if isinstance(e, dict)]
            names = [n for n in names if n]
            if names:
                return names

    text = get_first_string(item, config.multi_section_text_keys)
    if text:
        names = [part.strip() for part in text.split(",") if part.strip()]
        if names:
            return names

    return [None]


def extract_day_item_pairs(day: dict, config: ExtractionConfig) -> List[ItemPair]:
    """
    Item-level pass over one day of a day-map.

    Args:
        day: The day's record (an object of category arrays)
        config: Extraction config

    Returns:
        Unique pairs, one per (item, section) listing
    """
    keyword = config.keyword
    pairs = []
    seen = set()

    for category_value in day.values():
        if not isinstance(category_value, list):
            continue

        for item in category_value:
            if not isinstance(item, dict) or not has_string_value_matching(item, keyword):
                continue

            name = get_first_string(item, config.name_keys)
            if not is_valid_item_name(name, config):
                continue

            for section in item_sections(item, config):
                pair = ItemPair(name=name, section=section)
                if pair.key not in seen:
                    seen.add(pair.key)
                    pairs.append(pair)

    return pairs


def extract_day_pairs(day: Any, day_label: str, config: ExtractionConfig) -> List[ItemPair]:
    """Item-level pass, then the gated group pass."""
    if isinstance(day, dict):
        pairs = extract_day_item_pairs(day, config)
        if pairs:
            return pairs

    groups = find_groups(day, config.keyword, max_depth=config.max_depth)
    return first_qualifying_group(groups, config, day=day_label) or []


def extract_from_date_map(
    root: Any, start_date: str, config: ExtractionConfig
) -> Optional[ExtractionResult]:
    """
    Extract the first day at or after start_date that yields items.

    Args:
        root: Parsed JSON document
        start_date: ISO start date
        config: Extraction config

    Returns:
        Aggregated result, or None if root is not a day-map or no day qualifies
    """
    index = index_date_map(root)
    if not index:
        return None

    for record in iter_on_or_after(index, start_date):
        pairs = extract_day_pairs(record.value, record.date, config)
        if pairs:
            log_day_result(record.date, "date-map", len(pairs))
            return aggregate(pairs, record.date, config)

    return None
