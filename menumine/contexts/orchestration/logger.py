"""
Orchestration context logger.

Provides logging interface for pipeline runs with automatic [pipeline] prefix.
"""

from pathlib import Path
from typing import Mapping, Optional

from loguru import logger

from menumine.utils.logger import setup_run_logger

CONTEXT_PREFIX = "[pipeline]"


def setup_pipeline_logger(
    log_dir: Optional[Path], run_context: Optional[Mapping[str, object]] = None
) -> Optional[Path]:
    """
    Setup logger for a pipeline run.

    Args:
        log_dir: Directory for this run's log file; None logs to the console only
        run_context: Run settings recorded in the log header

    Returns:
        Path to log file, or None

    Example:
        from menumine.contexts.orchestration.logger import setup_pipeline_logger

        log_file = setup_pipeline_logger(Path("outs/logs/run_20260210_070000"))
    """
    return setup_run_logger("pipeline", log_dir, run_context=run_context)


def _log_info(message: str) -> None:
    """Log info message with [pipeline] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [pipeline] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [pipeline] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [pipeline] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [pipeline] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level pipeline logging helpers


def log_run_start(document_count: int, start_date: str, keyword_pattern: str) -> None:
    """Log start of a run with its parameters."""
    _log_info(f"Starting run over {document_count} documents")
    _log_debug(f"Start date: {start_date}, keyword: {keyword_pattern}")


def log_candidate_selected(candidate, candidate_count: int) -> None:
    """Log which candidate won scoring (Candidate from intake.candidates)."""
    _log_info(
        f"Best of {candidate_count} candidates: {candidate.source} "
        f"({candidate.byte_length} bytes, keyword={candidate.has_keyword_match}, "
        f"direct={candidate.has_direct_result})"
    )


def log_run_result(outcome) -> None:
    """
    Log the final outcome of a run.

    Args:
        outcome: PipelineOutcome from run_pipeline()
    """
    if outcome.status == "ok":
        _log_success(
            f"{outcome.result.date}: {outcome.result.item_count()} items via {outcome.strategy} "
            f"({outcome.compaction.byte_size} bytes)"
        )
    else:
        _log_error(f"Run failed ({outcome.error_kind}): {outcome.error}")

    if outcome.oversize:
        _log_warning(str(outcome.oversize))
