"""
Regex patterns for date and name heuristics.

Pattern classes follow the project convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns live next to their callers
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class DatePatterns:
    """
    Regex patterns for date-like tokens embedded in strings.

    - ISO: 2026-02-09 anywhere in the string
    - US: 2/9/2026 or 02/09/2026 (month and day validated by the caller)
    """

    ISO: re.Pattern = re.compile(r"\b20\d{2}-\d{2}-\d{2}\b")

    # Groups: month, day, year
    US: re.Pattern = re.compile(r"\b([01]?\d)/([0-3]?\d)/(20\d{2})\b")


@dataclass(frozen=True)
class NamePatterns:
    """
    Regex patterns for rejecting strings that are not item names.
    """

    BARE_URL: re.Pattern = re.compile(r"^https?://", re.IGNORECASE)
