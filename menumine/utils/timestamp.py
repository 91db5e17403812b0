"""Calendar date and local timestamp utilities.

All dates inside MENUMINE are ISO `YYYY-MM-DD` strings, so lexicographic
comparison is chronological comparison.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo


def now_local(tz: str) -> datetime:
    """Current time as an aware datetime in the given IANA timezone."""
    return datetime.now(ZoneInfo(tz))


def today_iso(tz: str, now: Optional[datetime] = None) -> str:
    """
    Today's date in the given timezone as YYYY-MM-DD.

    Args:
        tz: IANA timezone name (e.g., "America/Chicago")
        now: Optional reference time (aware or naive); naive values are taken as-is

    Returns:
        ISO calendar date string
    """
    if now is None:
        now = now_local(tz)
    elif now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(tz))
    return now.date().isoformat()


def add_days_iso(iso_date: str, days: int) -> str:
    """
    Shift an ISO date by a number of days.

    Example:
        >>> add_days_iso("2026-02-27", 3)
        '2026-03-02'
    """
    return (date.fromisoformat(iso_date) + timedelta(days=days)).isoformat()


def iso_to_us_date(iso_date: str) -> str:
    """Convert YYYY-MM-DD to MM/DD/YYYY."""
    year, month, day = iso_date.split("-")
    return f"{month}/{day}/{year}"


def format_date_display(iso_date: str) -> str:
    """
    Format an ISO date for compact display.

    Example:
        >>> format_date_display("2026-02-10")
        'Tue, Feb 10'
    """
    dt = date.fromisoformat(iso_date)
    return f"{dt:%a}, {dt:%b} {dt.day}"


def format_local_stamp(tz: str, now: Optional[datetime] = None) -> str:
    """
    Human-readable local time stamp for payloads.

    Args:
        tz: IANA timezone name
        now: Optional reference time (defaults to current time)

    Returns:
        Stamp like "Tue, Feb 10, 7:05 AM"
    """
    if now is None:
        now = now_local(tz)
    elif now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(tz))

    hour = now.hour % 12 or 12
    meridiem = "AM" if now.hour < 12 else "PM"
    return f"{now:%a}, {now:%b} {now.day}, {hour}:{now:%M} {meridiem}"
