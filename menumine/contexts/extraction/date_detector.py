"""
Calendar date detection on records of unknown shape.

Two-tier lookup: a configured list of well-known date keys first (key order
is the tie-break), then a scan over the record's immediate values. Upstream
shapes change without notice, so both tiers are kept.
"""

from datetime import date
from typing import Any, Iterable, Optional

from menumine.contexts.extraction.patterns import DatePatterns
from menumine.utils.json_tree import first_by_keys, first_by_values


def us_date_to_iso(value: Any) -> Optional[str]:
    """
    Convert an embedded M/D/YYYY token to YYYY-MM-DD.

    The token must name a real calendar day; "02/30/2026" or "13/09/2026"
    are rejected rather than reformatted.

    Example:
        >>> us_date_to_iso("02/09/2026")
        '2026-02-09'
        >>> us_date_to_iso("13/09/2026") is None
        True
        >>> us_date_to_iso("02/30/2026") is None
        True
    """
    if not isinstance(value, str):
        return None

    match = DatePatterns.US.search(value)
    if not match:
        return None

    month = int(match.group(1))
    day = int(match.group(2))
    year = int(match.group(3))

    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def coerce_iso_date(value: Any) -> Optional[str]:
    """
    Coerce a string holding a date-like token to canonical YYYY-MM-DD.

    An embedded ISO token wins over a US-style token. Tokens that do not name
    a real calendar day ("2026-02-30", "2026-13-45") are never returned.

    Example:
        >>> coerce_iso_date("menu for 2026-02-09")
        '2026-02-09'
        >>> coerce_iso_date("2/9/2026")
        '2026-02-09'
        >>> coerce_iso_date("2026-02-30") is None
        True
    """
    if not isinstance(value, str):
        return None

    match = DatePatterns.ISO.search(value)
    if match:
        try:
            return date.fromisoformat(match.group(0)).isoformat()
        except ValueError:
            pass

    return us_date_to_iso(value)


def looks_like_date(value: str) -> bool:
    """True if the string embeds an ISO or US date token."""
    return bool(DatePatterns.ISO.search(value) or DatePatterns.US.search(value))


def detect_date(obj: Any, date_keys: Iterable[str]) -> Optional[str]:
    """
    Extract a canonical calendar date from a record.

    Args:
        obj: JSON value (only objects can carry a date)
        date_keys: Ordered well-known date keys; the first that coerces wins

    Returns:
        YYYY-MM-DD string, or None if nothing coerces
    """
    if not isinstance(obj, dict):
        return None

    found = first_by_keys(obj, date_keys, coerce_iso_date)
    if found:
        return found

    return first_by_values(obj, coerce_iso_date)
