"""
Compaction context logger.

Provides logging interface for the compaction context with automatic [compact] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[compact]"


def _log_info(message: str) -> None:
    """Log info message with [compact] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [compact] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [compact] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_profile_attempt(index: int, total: int, byte_size: int, budget: int) -> None:
    """Log one rung of the ladder."""
    _log_debug(f"profile {index + 1}/{total}: {byte_size} bytes (budget {budget})")


def log_compaction_result(result, budget: int, total: int) -> None:
    """
    Log where the ladder settled.

    Args:
        result: CompactionResult from compact()
        budget: Byte budget
        total: Number of profiles in the ladder
    """
    if result.fits_budget:
        _log_info(
            f"payload {result.byte_size} bytes fits budget {budget} "
            f"(profile {result.profile_index + 1}/{total})"
        )
    else:
        _log_warning(
            f"payload still {result.byte_size} bytes after the narrowest profile "
            f"(budget {budget}); delivering anyway"
        )
