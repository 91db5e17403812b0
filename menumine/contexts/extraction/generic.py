"""
Generic extraction over a whole document tree.

Used when the document is not a day-map. Makes no assumption about where the
days live:

1. Candidate day arrays (short arrays of objects, some of them dated) are
   scored by unique dates and keyword hits; the best few are tried
2. Failing that, every dated object anywhere in the tree is treated as a day

Each day is searched with GroupFilter + ItemExtractor, gated by the minimum
group yield.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.extraction.data_structures import ExtractionResult
from menumine.contexts.extraction.date_detector import detect_date
from menumine.contexts.extraction.day_index import index_day_objects, iter_on_or_after
from menumine.contexts.extraction.group_filter import find_groups
from menumine.contexts.extraction.item_extractor import first_qualifying_group
from menumine.contexts.extraction.logger import log_day_arrays, log_day_result
from menumine.contexts.extraction.section_aggregator import aggregate
from menumine.utils.json_tree import is_container, iter_nodes, to_compact_json


@dataclass
class ScoredDayArray:
    """A candidate day array and its plausibility score."""

    days: list
    unique_dates: List[str]
    keyword_hits: int

    @property
    def score(self) -> int:
        return len(self.unique_dates) * 10 + self.keyword_hits * 5


def is_candidate_day_array(node: Any, config: ExtractionConfig) -> bool:
    """Array of config-bounded length whose elements are all containers, some dated."""
    return (
        isinstance(node, list)
        and config.day_array_min_len <= len(node) <= config.day_array_max_len
        and all(is_container(e) for e in node)
        and any(detect_date(e, config.date_keys) for e in node)
    )


def find_candidate_day_arrays(root: Any, config: ExtractionConfig) -> List[ScoredDayArray]:
    """
    Find and score candidate day arrays, best first.

    Ties keep document order.
    """
    keyword = config.keyword
    scored = []

    for node in iter_nodes(root, max_depth=config.max_depth):
        if not is_candidate_day_array(node, config):
            continue

        dates = [detect_date(e, config.date_keys) for e in node]
        unique_dates = list(dict.fromkeys(d for d in dates if d))
        hits = sum(1 for e in node if keyword.search(to_compact_json(e)))
        scored.append(ScoredDayArray(days=node, unique_dates=unique_dates, keyword_hits=hits))

    scored.sort(key=lambda c: c.score, reverse=True)
    return scored


def find_dated_objects(root: Any, config: ExtractionConfig) -> List[dict]:
    """Every object in the tree that carries a date."""
    return [
        node
        for node in iter_nodes(root, max_depth=config.max_depth)
        if isinstance(node, dict) and detect_date(node, config.date_keys)
    ]


def extract_from_day_objects(
    day_objects: Iterable[Any], start_date: str, config: ExtractionConfig, strategy: str
) -> Optional[ExtractionResult]:
    """
    First day at or after start_date holding a qualifying group.

    Args:
        day_objects: Objects that may carry their own date
        start_date: ISO start date
        config: Extraction config
        strategy: Label for logging

    Returns:
        Aggregated result, or None
    """
    index = index_day_objects(day_objects, config.date_keys)

    for record in iter_on_or_after(index, start_date):
        groups = find_groups(record.value, config.keyword, max_depth=config.max_depth)
        pairs = first_qualifying_group(groups, config, day=record.date)
        if pairs:
            log_day_result(record.date, strategy, len(pairs))
            return aggregate(pairs, record.date, config)

    return None


def extract_from_tree(
    root: Any, start_date: str, config: ExtractionConfig
) -> Optional[ExtractionResult]:
    """
    Generic extraction: scored day arrays first, then any dated object.

    Args:
        root: Parsed JSON document of any shape
        start_date: ISO start date
        config: Extraction config

    Returns:
        Aggregated result, or None if nothing qualifies
    """
    day_arrays = find_candidate_day_arrays(root, config)
    top = day_arrays[: config.max_day_arrays]
    log_day_arrays(len(day_arrays), len(top))

    for candidate in top:
        result = extract_from_day_objects(candidate.days, start_date, config, "day-array")
        if result:
            return result

    return extract_from_day_objects(
        find_dated_objects(root, config), start_date, config, "dated-objects"
    )
