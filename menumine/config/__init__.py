"""
Configuration for MENUMINE.

A single immutable ExtractionConfig value carries every tunable (key lists,
caps, byte budget, compaction ladder) into each pipeline call.
"""

from menumine.config.config_resolver import config_from_dict, load_config
from menumine.config.extraction_config import (
    CompactionProfile,
    ExtractionConfig,
    validate_profile_ladder,
)

__all__ = [
    "CompactionProfile",
    "ExtractionConfig",
    "config_from_dict",
    "load_config",
    "validate_profile_ladder",
]
