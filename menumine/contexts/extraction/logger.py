"""
Extraction context logger.

Provides logging interface for the extraction context with automatic [extract] prefix.
All extraction modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[extract]"


def _log_info(message: str) -> None:
    """Log info message with [extract] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [extract] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [extract] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level extraction-specific logging helpers


def log_group_rejected(day: str, pair_count: int, min_pairs: int) -> None:
    """Log a candidate group that yielded too few items to be trusted."""
    _log_debug(f"{day}: group rejected ({pair_count} pairs, need {min_pairs})")


def log_day_result(day: str, strategy: str, pair_count: int) -> None:
    """Log the day a strategy settled on."""
    _log_info(f"{strategy}: found {pair_count} items for {day}")


def log_day_arrays(found: int, tried: int) -> None:
    """Log how many candidate day arrays the generic strategy found and tried."""
    _log_debug(f"generic: {found} candidate day arrays, trying top {tried}")
