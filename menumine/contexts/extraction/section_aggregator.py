"""
Aggregation of item pairs into labeled sections.

Ordering rules:
- Sections appear in first-encounter order, then are stably sorted by item
  count descending (equal counts keep first-encounter order)
- Items keep insertion order within a section; duplicates are dropped
- Unlabeled items go to a separate fallback bucket
"""

from typing import Iterable, Optional

from menumine.config.extraction_config import CompactionProfile, ExtractionConfig
from menumine.contexts.extraction.data_structures import ExtractionResult, ItemPair, Section
from menumine.utils.text_processing import clean_label, truncate_text


def normalize_section_label(label: Optional[str], config: ExtractionConfig) -> Optional[str]:
    """
    Canonical section label for grouping and display.

    Strips diacritics and trademark glyphs, collapses whitespace, maps known
    aliases case-insensitively, otherwise caps the length.

    Args:
        label: Raw section value from the source
        config: Supplies section_aliases and section_label_max_chars

    Returns:
        Canonical label, or None if nothing usable remains

    Example:
        >>> normalize_section_label("  Main Entrée® ", ExtractionConfig())
        'Entrees'
    """
    if not isinstance(label, str):
        return None

    cleaned = clean_label(label)
    if not cleaned:
        return None

    alias = config.section_aliases.get(cleaned.lower())
    if alias:
        return alias

    return truncate_text(cleaned, config.section_label_max_chars)


def aggregate(pairs: Iterable[ItemPair], date: str, config: ExtractionConfig) -> ExtractionResult:
    """
    Group pairs by normalized section label.

    Args:
        pairs: Extracted pairs in extraction order
        date: ISO date the pairs belong to
        config: Extraction config (label normalization)

    Returns:
        Uncapped ExtractionResult; capping is per compaction profile (cap_result)
    """
    buckets = {}
    fallback = []

    for pair in pairs:
        label = normalize_section_label(pair.section, config)
        if label:
            items = buckets.setdefault(label, [])
            if pair.name not in items:
                items.append(pair.name)
        elif pair.name not in fallback:
            fallback.append(pair.name)

    sections = [Section(name=name, items=items) for name, items in buckets.items()]
    # Stable: ties keep first-encounter order
    sections.sort(key=lambda s: len(s.items), reverse=True)

    return ExtractionResult(date=date, sections=sections, fallback_items=fallback)


def cap_result(result: ExtractionResult, profile: CompactionProfile) -> ExtractionResult:
    """
    Apply a profile's count caps.

    Sections left without items are dropped.
    """
    sections = []
    for section in result.sections[: profile.section_limit]:
        items = section.items[: profile.items_per_section]
        if items:
            sections.append(Section(name=section.name, items=list(items)))

    return ExtractionResult(
        date=result.date,
        sections=sections,
        fallback_items=list(result.fallback_items[: profile.fallback_limit]),
    )
