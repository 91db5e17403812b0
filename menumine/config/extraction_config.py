"""
Immutable configuration value threaded through every pipeline call.
"""

import re
import string
from dataclasses import dataclass, field, fields
from typing import Dict, Optional, Tuple

from menumine.config.defaults import (
    DEFAULT_BYTE_BUDGET,
    DEFAULT_DATE_KEYS,
    DEFAULT_FALLBACK_ID_PARAM,
    DEFAULT_FALLBACK_OFFSETS,
    DEFAULT_FALLBACK_URL_TEMPLATE,
    DEFAULT_GENERIC_NAMES,
    DEFAULT_KEYWORD_PATTERN,
    DEFAULT_MIN_GROUP_PAIRS,
    DEFAULT_MULTI_SECTION_LIST_KEYS,
    DEFAULT_MULTI_SECTION_TEXT_KEYS,
    DEFAULT_NAME_KEYS,
    DEFAULT_PROBE_TIMEOUT_S,
    DEFAULT_PROFILES,
    DEFAULT_SECTION_ALIASES,
    DEFAULT_SECTION_KEYS,
    DEFAULT_TIMEZONE,
)

# Smallest character cap that always leaves room for the ellipsis marker
MIN_CHAR_CAP = 2
CHAR_CAP_FIELDS = ("section_name_max_chars", "item_max_chars", "error_max_chars")

# Placeholders a fallback URL template may use
FALLBACK_TEMPLATE_FIELDS = frozenset({"menu_id", "iso_date", "us_date"})


@dataclass(frozen=True)
class CompactionProfile:
    """
    One rung of the size/fidelity ladder.

    Attributes:
        section_limit: Maximum number of sections kept
        items_per_section: Maximum items kept per section
        fallback_limit: Maximum unlabeled items kept
        section_name_max_chars: Character cap for section names
        item_max_chars: Character cap for each item name
        error_max_chars: Character cap for the error string
    """

    section_limit: int
    items_per_section: int
    fallback_limit: int
    section_name_max_chars: int
    item_max_chars: int
    error_max_chars: int

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"Profile field '{f.name}' must be a non-negative int, got: {value!r}")
            if f.name in CHAR_CAP_FIELDS and value < MIN_CHAR_CAP:
                raise ValueError(
                    f"Profile field '{f.name}' must be at least {MIN_CHAR_CAP}, got: {value}"
                )

    def is_at_least_as_strict_as(self, other: "CompactionProfile") -> bool:
        """True if no limit of this profile exceeds the matching limit of other."""
        return all(getattr(self, f.name) <= getattr(other, f.name) for f in fields(self))


def _default_profiles() -> Tuple[CompactionProfile, ...]:
    return tuple(CompactionProfile(**p) for p in DEFAULT_PROFILES)


def validate_profile_ladder(profiles: Tuple[CompactionProfile, ...]) -> None:
    """
    Check that a profile ladder is usable.

    Raises:
        ValueError: If the ladder is empty or any limit grows from one rung to the next
    """
    if not profiles:
        raise ValueError("At least one compaction profile is required")

    for index in range(1, len(profiles)):
        if not profiles[index].is_at_least_as_strict_as(profiles[index - 1]):
            raise ValueError(
                f"Compaction profile {index} loosens a limit of profile {index - 1}; "
                "profiles must be ordered from most generous to most restrictive"
            )


def validate_fallback_template(template: str) -> None:
    """
    Check that a fallback URL template only uses known placeholders.

    Raises:
        ValueError: If the template is malformed, names an unknown or positional
            field, or carries a format spec that a string value cannot take

    Example:
        >>> validate_fallback_template("https://m.test/weekly?menuId={menu_id}&date={us_date}")
        >>> validate_fallback_template("https://m.test/weekly?id={menuId}")
        Traceback (most recent call last):
        ...
        ValueError: Unknown fallback_url_template placeholders: 'menuId' (allowed: iso_date, menu_id, us_date)
    """
    formatter = string.Formatter()
    try:
        names = set()
        for _, name, spec, _ in formatter.parse(template):
            if name is not None:
                names.add(name)
            if spec:
                names.update(n for _, n, _, _ in formatter.parse(spec) if n is not None)
    except ValueError as e:
        raise ValueError(f"Malformed fallback_url_template {template!r}: {e}") from e

    unknown = names - FALLBACK_TEMPLATE_FIELDS
    if unknown:
        raise ValueError(
            f"Unknown fallback_url_template placeholders: {', '.join(repr(n) for n in sorted(unknown))} "
            f"(allowed: {', '.join(sorted(FALLBACK_TEMPLATE_FIELDS))})"
        )

    try:
        template.format(menu_id="0", iso_date="2026-01-01", us_date="01/01/2026")
    except ValueError as e:
        raise ValueError(f"Malformed fallback_url_template {template!r}: {e}") from e


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Tunables for extraction, compaction and fallback probing.

    Key lists are ordered: earlier keys win. All fields are plain data so the
    whole value can be loaded from YAML (see config_resolver.load_config).
    """

    keyword_pattern: str = DEFAULT_KEYWORD_PATTERN
    timezone: str = DEFAULT_TIMEZONE
    source_url: Optional[str] = None

    # Key lists
    date_keys: Tuple[str, ...] = DEFAULT_DATE_KEYS
    name_keys: Tuple[str, ...] = DEFAULT_NAME_KEYS
    section_keys: Tuple[str, ...] = DEFAULT_SECTION_KEYS
    multi_section_list_keys: Tuple[str, ...] = DEFAULT_MULTI_SECTION_LIST_KEYS
    multi_section_text_keys: Tuple[str, ...] = DEFAULT_MULTI_SECTION_TEXT_KEYS

    # Item validity
    generic_names: Tuple[str, ...] = DEFAULT_GENERIC_NAMES
    name_min_chars: int = 2
    name_max_chars: int = 80
    min_group_pairs: int = DEFAULT_MIN_GROUP_PAIRS

    # Section labels
    section_aliases: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SECTION_ALIASES))
    section_label_max_chars: int = 24

    # Traversal
    max_depth: int = 4000
    day_array_min_len: int = 2
    day_array_max_len: int = 45
    max_day_arrays: int = 5

    # Candidates and fallback probes
    min_document_bytes: int = 0
    fallback_url_template: Optional[str] = DEFAULT_FALLBACK_URL_TEMPLATE
    fallback_id_param: str = DEFAULT_FALLBACK_ID_PARAM
    fallback_offsets: Tuple[int, ...] = DEFAULT_FALLBACK_OFFSETS
    probe_timeout_s: float = DEFAULT_PROBE_TIMEOUT_S

    # Compaction
    byte_budget: int = DEFAULT_BYTE_BUDGET
    profiles: Tuple[CompactionProfile, ...] = field(default_factory=_default_profiles)

    def __post_init__(self):
        try:
            re.compile(self.keyword_pattern)
        except re.error as e:
            raise ValueError(f"Invalid keyword pattern {self.keyword_pattern!r}: {e}") from e

        if self.min_group_pairs < 1:
            raise ValueError(f"min_group_pairs must be >= 1, got: {self.min_group_pairs}")
        if self.name_min_chars > self.name_max_chars:
            raise ValueError("name_min_chars must not exceed name_max_chars")
        if self.section_label_max_chars < MIN_CHAR_CAP:
            raise ValueError(
                f"section_label_max_chars must be at least {MIN_CHAR_CAP}, "
                f"got: {self.section_label_max_chars}"
            )
        if self.byte_budget <= 0:
            raise ValueError(f"byte_budget must be positive, got: {self.byte_budget}")
        if any(offset < 0 for offset in self.fallback_offsets):
            raise ValueError("fallback_offsets must be non-negative day offsets")
        if self.fallback_url_template:
            validate_fallback_template(self.fallback_url_template)

        validate_profile_ladder(self.profiles)

    @property
    def keyword(self) -> re.Pattern:
        """Compiled case-insensitive keyword pattern."""
        return re.compile(self.keyword_pattern, re.IGNORECASE)

    @property
    def generic_name_set(self) -> frozenset:
        return frozenset(name.lower() for name in self.generic_names)
