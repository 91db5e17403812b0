"""
Data structures for the Extraction context.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class DayRecord:
    """One candidate day found in a source tree."""

    date: str
    value: Any


@dataclass(frozen=True)
class ItemPair:
    """
    A named item and the section it was listed under.

    Identity is (name, section); pairs are unique within one extraction.
    """

    name: str
    section: Optional[str] = None

    @property
    def key(self) -> tuple:
        return (self.name, self.section)


@dataclass
class Section:
    """Labeled group of unique item names in insertion order."""

    name: str
    items: List[str] = field(default_factory=list)


@dataclass
class ExtractionResult:
    """
    Canonical extraction output.

    Attributes:
        date: ISO date of the day the items belong to
        sections: Labeled sections, largest first
        fallback_items: Items that carried no section label
    """

    date: str
    sections: List[Section] = field(default_factory=list)
    fallback_items: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.sections and not self.fallback_items

    def item_count(self) -> int:
        return sum(len(s.items) for s in self.sections) + len(self.fallback_items)
