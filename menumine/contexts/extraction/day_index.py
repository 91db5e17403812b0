"""
Date-sorted view over date-bearing records.
"""

from typing import Any, Iterable, Iterator, List, Optional, Tuple

from menumine.contexts.extraction.data_structures import DayRecord
from menumine.contexts.extraction.date_detector import coerce_iso_date, detect_date


def build_day_index(records: Iterable[Tuple[Optional[str], Any]]) -> List[DayRecord]:
    """
    Sort (date, value) records by date, dropping undated ones.

    The sort is stable, so records sharing a date keep their discovery order.
    ISO strings sort chronologically.
    """
    dated = [DayRecord(date=d, value=v) for d, v in records if d]
    return sorted(dated, key=lambda record: record.date)


def index_day_objects(objects: Iterable[Any], date_keys: Iterable[str]) -> List[DayRecord]:
    """Build a day index from records that carry their own date."""
    date_keys = tuple(date_keys)
    return build_day_index((detect_date(obj, date_keys), obj) for obj in objects)


def index_date_map(root: Any) -> List[DayRecord]:
    """
    Build a day index from a day-map: an object keyed by date-like strings.

    Only entries whose value is an object are kept.
    """
    if not isinstance(root, dict):
        return []

    return build_day_index(
        (coerce_iso_date(key), value) for key, value in root.items() if isinstance(value, dict)
    )


def iter_on_or_after(index: List[DayRecord], start_date: str) -> Iterator[DayRecord]:
    """Yield indexed days at or after start_date, earliest first."""
    for record in index:
        if record.date >= start_date:
            yield record


def first_on_or_after(index: List[DayRecord], start_date: str) -> Optional[DayRecord]:
    """The first indexed day at or after start_date, or None."""
    return next(iter_on_or_after(index, start_date), None)
