"""
Adaptive payload compaction.

Walks the profile ladder from most generous to most restrictive and keeps the
first envelope whose serialized size fits the byte budget. If none fits, the
narrowest envelope is returned flagged as oversize: a truncated payload is
better than no payload.

Serialized size never grows along a validated ladder: every limit is
non-increasing and truncation never makes a string longer in bytes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from menumine.config.extraction_config import CompactionProfile, ExtractionConfig
from menumine.contexts.compaction.envelope import (
    build_error_envelope,
    build_ok_envelope,
    payload_bytes,
)
from menumine.contexts.compaction.logger import log_compaction_result, log_profile_attempt
from menumine.contexts.extraction.data_structures import ExtractionResult
from menumine.utils.timestamp import now_local


@dataclass
class CompactionResult:
    """
    Outcome of walking the profile ladder.

    Attributes:
        output: The chosen envelope
        byte_size: Serialized size of the chosen envelope
        profile_used: Profile that produced it
        profile_index: Position of that profile in the ladder
        fits_budget: False when even the last profile exceeds the budget
        attempt_sizes: Serialized size of every profile tried, in order
    """

    output: dict
    byte_size: int
    profile_used: CompactionProfile
    profile_index: int
    fits_budget: bool
    attempt_sizes: List[int] = field(default_factory=list)


def compact(
    build: Callable[[CompactionProfile], dict],
    profiles: Sequence[CompactionProfile],
    budget: int,
) -> CompactionResult:
    """
    Apply profiles in order until the built envelope fits the budget.

    Args:
        build: Builds the envelope for one profile
        profiles: Ladder, most generous first
        budget: Maximum serialized size in bytes

    Returns:
        CompactionResult for the first fitting profile, or for the last profile
        with fits_budget=False

    Raises:
        ValueError: If profiles is empty
    """
    if not profiles:
        raise ValueError("At least one compaction profile is required")

    sizes = []
    last = None

    for index, profile in enumerate(profiles):
        envelope = build(profile)
        size = payload_bytes(envelope)
        sizes.append(size)
        log_profile_attempt(index, len(profiles), size, budget)

        last = CompactionResult(
            output=envelope,
            byte_size=size,
            profile_used=profile,
            profile_index=index,
            fits_budget=size <= budget,
            attempt_sizes=list(sizes),
        )
        if last.fits_budget:
            break

    log_compaction_result(last, budget, len(profiles))
    return last


def compact_result(
    result: ExtractionResult, config: ExtractionConfig, now: Optional[datetime] = None
) -> CompactionResult:
    """Compact a success envelope under config.byte_budget."""
    # One reference time for every rung so the stamp cannot change size mid-ladder
    now = now or now_local(config.timezone)
    return compact(
        lambda profile: build_ok_envelope(result, profile, config, now),
        config.profiles,
        config.byte_budget,
    )


def compact_error(
    message: str, config: ExtractionConfig, now: Optional[datetime] = None
) -> CompactionResult:
    """Compact an error envelope; failures obey the same byte budget."""
    now = now or now_local(config.timezone)
    return compact(
        lambda profile: build_error_envelope(message, profile, config, now),
        config.profiles,
        config.byte_budget,
    )
