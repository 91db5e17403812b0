"""
Webhook envelope construction and measurement.

The consumer reads a flat object of merge variables:

    {"status": "ok", "updated_at_local": "Tue, Feb 10, 7:05 AM",
     "date": "2026-02-10", "date_display": "Tue, Feb 10", "note": "Today",
     "sections": [{"name": "Entrees", "items_joined": "Pizza, Burger"}],
     "items": ["Fruit Cup"]}

Error envelopes keep the same keys with empty values plus a bounded "error".
Size is measured on the body actually posted: {"merge_variables": envelope}.
"""

from datetime import datetime
from typing import Optional

from menumine.config.extraction_config import CompactionProfile, ExtractionConfig
from menumine.contexts.extraction.data_structures import ExtractionResult
from menumine.contexts.extraction.section_aggregator import cap_result
from menumine.utils.json_tree import to_compact_json
from menumine.utils.text_processing import truncate_text, utf8_len
from menumine.utils.timestamp import format_date_display, format_local_stamp, today_iso

ITEM_SEPARATOR = ", "


def _header(status: str, config: ExtractionConfig, now: Optional[datetime]) -> dict:
    header = {
        "status": status,
        "updated_at_local": format_local_stamp(config.timezone, now),
    }
    if config.source_url:
        header["source_url"] = config.source_url
    return header


def build_ok_envelope(
    result: ExtractionResult,
    profile: CompactionProfile,
    config: ExtractionConfig,
    now: Optional[datetime] = None,
) -> dict:
    """
    Success envelope with the profile's caps and truncation applied.

    Args:
        result: Uncapped extraction result
        profile: Active compaction profile
        config: Supplies timezone and source_url
        now: Reference time for the stamp and the "Today" note

    Returns:
        Envelope dict ready for serialization
    """
    capped = cap_result(result, profile)

    sections = [
        {
            "name": truncate_text(section.name, profile.section_name_max_chars),
            "items_joined": ITEM_SEPARATOR.join(
                truncate_text(item, profile.item_max_chars) for item in section.items
            ),
        }
        for section in capped.sections
    ]

    envelope = _header("ok", config, now)
    envelope.update(
        {
            "date": result.date,
            "date_display": format_date_display(result.date),
            "note": "Today" if result.date == today_iso(config.timezone, now) else None,
            "sections": sections,
            "items": [truncate_text(item, profile.item_max_chars) for item in capped.fallback_items],
        }
    )
    return envelope


def build_error_envelope(
    message: str,
    profile: CompactionProfile,
    config: ExtractionConfig,
    now: Optional[datetime] = None,
) -> dict:
    """Error envelope with the message capped at the profile's error length."""
    envelope = _header("error", config, now)
    envelope.update(
        {
            "error": truncate_text(message, profile.error_max_chars),
            "date": None,
            "date_display": None,
            "note": None,
            "sections": [],
            "items": [],
        }
    )
    return envelope


def wrap_payload(envelope: dict) -> dict:
    """The request body the webhook consumer receives."""
    return {"merge_variables": envelope}


def payload_bytes(envelope: dict) -> int:
    """UTF-8 size of the serialized request body."""
    return utf8_len(to_compact_json(wrap_payload(envelope)))
