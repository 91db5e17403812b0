"""
Extraction Context

Responsibilities:
- Detects calendar dates on records of unknown shape
- Orders date-bearing records and picks the first day at or after a start date
- Finds keyword-matching groups and extracts named leaf items from them
- Aggregates items into labeled, ordered, deduplicated sections

Owns: Structured (day-map) and generic tree extraction
Never: Measures payload size or talks to the network
"""

from menumine.contexts.extraction.data_structures import (
    DayRecord,
    ExtractionResult,
    ItemPair,
    Section,
)
from menumine.contexts.extraction.date_detector import coerce_iso_date, detect_date
from menumine.contexts.extraction.date_map import extract_from_date_map
from menumine.contexts.extraction.generic import extract_from_tree
from menumine.contexts.extraction.section_aggregator import aggregate, cap_result

__all__ = [
    # Data structures
    "DayRecord",
    "ExtractionResult",
    "ItemPair",
    "Section",
    # Date detection
    "coerce_iso_date",
    "detect_date",
    # Extraction strategies
    "extract_from_date_map",
    "extract_from_tree",
    # Aggregation
    "aggregate",
    "cap_result",
]
