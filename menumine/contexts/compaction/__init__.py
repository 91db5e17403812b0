"""
Compaction Context

Responsibilities:
- Builds the flat webhook envelope for success and error outcomes
- Measures the serialized envelope in UTF-8 bytes
- Walks the compaction profile ladder until the envelope fits the byte budget

Owns: Wire envelope shape, byte budget enforcement
Never: Extracts items or decides which document to use
"""

from menumine.contexts.compaction.compactor import (
    CompactionResult,
    compact,
    compact_error,
    compact_result,
)
from menumine.contexts.compaction.envelope import (
    build_error_envelope,
    build_ok_envelope,
    payload_bytes,
)

__all__ = [
    "CompactionResult",
    "compact",
    "compact_error",
    "compact_result",
    "build_error_envelope",
    "build_ok_envelope",
    "payload_bytes",
]
