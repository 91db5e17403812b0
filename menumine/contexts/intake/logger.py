"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_candidate_scored(candidate) -> None:
    """Log a scored candidate (Candidate from candidates.py)."""
    _log_debug(
        f"candidate {candidate.source}: {candidate.byte_length} bytes, "
        f"keyword={candidate.has_keyword_match}, direct={candidate.has_direct_result}, "
        f"score={candidate.score}"
    )


def log_candidate_skipped(source: str, reason: str) -> None:
    """Log a document dropped before scoring."""
    _log_debug(f"skipping {source}: {reason}")


def log_probe_failed(url: str, error: Exception) -> None:
    """Log a failed fallback probe; the loop moves on to the next one."""
    _log_warning(f"fallback probe failed, trying next: {error}")
    _log_debug(f"  probe url: {url}")
