"""
Pipeline Orchestration

Drives one run from raw documents to a compacted envelope:

    Start → CandidatesGathered → StructuredExtractionTried
          → (ResultFound | GenericExtractionTried → ResultFound) → Success
          → Failure (no candidates, or no result from either path)

There is no retry or resume: each run is one pass. Per-document and
per-probe failures are logged and skipped; only total exhaustion surfaces,
as an error envelope that goes through the same compaction as success output.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.compaction.compactor import CompactionResult, compact_error, compact_result
from menumine.contexts.extraction.data_structures import ExtractionResult
from menumine.contexts.extraction.generic import extract_from_tree
from menumine.contexts.intake.candidates import Candidate, gather_candidates, select_best
from menumine.contexts.intake.fallback import build_fallback_probes, probe_fallbacks
from menumine.contexts.intake.fetcher import Fetcher
from menumine.contexts.orchestration.logger import (
    _log_debug,
    _log_warning,
    log_candidate_selected,
    log_run_result,
    log_run_start,
)
from menumine.exceptions import MenumineError, NoCandidateData, NoResultFound, OversizePayload
from menumine.utils.json_tree import TreeDepthExceeded
from menumine.utils.timestamp import now_local, today_iso


class PipelineState(str, Enum):
    """States a run passes through."""

    START = "start"
    CANDIDATES_GATHERED = "candidates_gathered"
    STRUCTURED_EXTRACTION_TRIED = "structured_extraction_tried"
    GENERIC_EXTRACTION_TRIED = "generic_extraction_tried"
    RESULT_FOUND = "result_found"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class PipelineOutcome:
    """
    Result of run_pipeline().

    Attributes:
        status: "ok" or "error"
        compaction: Compacted envelope and its size
        result: Uncapped extraction result (None on failure)
        error: Error that ended the run (None on success)
        source: Identifier of the document the result came from
        strategy: "date-map", "fallback" or "generic"
        states: States visited, in order
        oversize: Set when the envelope exceeds the budget after compaction
    """

    status: str
    compaction: CompactionResult
    result: Optional[ExtractionResult] = None
    error: Optional[MenumineError] = None
    source: Optional[str] = None
    strategy: Optional[str] = None
    states: List[PipelineState] = field(default_factory=list)
    oversize: Optional[OversizePayload] = None

    @property
    def envelope(self) -> dict:
        return self.compaction.output

    @property
    def fits_budget(self) -> bool:
        return self.compaction.fits_budget

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error else None

    @property
    def final_state(self) -> PipelineState:
        return self.states[-1]


def _select_candidate(
    candidates: List[Candidate],
    start_date: str,
    config: ExtractionConfig,
    fetch: Optional[Fetcher],
    cancel_event: Optional[threading.Event],
) -> Candidate:
    """Best captured candidate, replaced by a fallback probe hit when it lacks a direct result."""
    best = select_best(candidates)
    log_candidate_selected(best, len(candidates))

    if best.has_direct_result or fetch is None:
        return best

    probes = build_fallback_probes(candidates, start_date, config)
    _log_debug(f"{len(probes)} fallback probes available")
    winner = probe_fallbacks(probes, fetch, start_date, config, cancel_event=cancel_event)
    return winner or best


def _extract(
    documents: List[Tuple[str, Any]],
    start_date: str,
    config: ExtractionConfig,
    fetch: Optional[Fetcher],
    cancel_event: Optional[threading.Event],
    states: List[PipelineState],
) -> Tuple[ExtractionResult, str, str]:
    """
    Run the extraction state machine.

    Returns:
        (result, source, strategy)

    Raises:
        NoCandidateData: If no document survives scoring
        NoResultFound: If both structured and generic extraction come up empty
    """
    candidates = gather_candidates(documents, start_date, config)
    if not candidates:
        raise NoCandidateData(supplied=len(documents), skipped=len(documents))
    states.append(PipelineState.CANDIDATES_GATHERED)

    best = _select_candidate(candidates, start_date, config, fetch, cancel_event)
    states.append(PipelineState.STRUCTURED_EXTRACTION_TRIED)

    if best.has_direct_result:
        strategy = "fallback" if best.origin == "fallback" else "date-map"
        return best.direct_result, best.source, strategy

    states.append(PipelineState.GENERIC_EXTRACTION_TRIED)
    try:
        result = extract_from_tree(best.raw, start_date, config)
    except TreeDepthExceeded as e:
        _log_warning(f"generic extraction abandoned: {e}")
        result = None

    if result is None:
        raise NoResultFound(source=best.source, strategies=("date-map", "fallback", "generic"))

    return result, best.source, "generic"


def run_pipeline(
    documents: Iterable[Tuple[str, Any]],
    config: ExtractionConfig,
    fetch: Optional[Fetcher] = None,
    start_date: Optional[str] = None,
    now: Optional[datetime] = None,
    cancel_event: Optional[threading.Event] = None,
) -> PipelineOutcome:
    """
    Extract the next matching day from captured documents and compact it.

    Args:
        documents: (source identifier, parsed JSON) pairs in discovery order
        config: Extraction config
        fetch: Fallback probe fetcher (e.g. intake.fetch_json); None disables probing
        start_date: ISO start date (defaults to today in config.timezone)
        now: Reference time for stamps (defaults to current time)
        cancel_event: Checked before each fallback fetch

    Returns:
        PipelineOutcome; never raises for extraction failures
    """
    documents = list(documents)
    now = now or now_local(config.timezone)
    start_date = start_date or today_iso(config.timezone, now)
    states = [PipelineState.START]

    log_run_start(len(documents), start_date, config.keyword_pattern)

    try:
        result, source, strategy = _extract(
            documents, start_date, config, fetch, cancel_event, states
        )
    except (NoCandidateData, NoResultFound) as e:
        states.append(PipelineState.FAILURE)
        outcome = PipelineOutcome(
            status="error",
            compaction=compact_error(str(e), config, now),
            error=e,
            source=getattr(e, "source", None),
            states=states,
        )
    else:
        states.extend([PipelineState.RESULT_FOUND, PipelineState.SUCCESS])
        outcome = PipelineOutcome(
            status="ok",
            compaction=compact_result(result, config, now),
            result=result,
            source=source,
            strategy=strategy,
            states=states,
        )

    if not outcome.fits_budget:
        outcome.oversize = OversizePayload(outcome.compaction.byte_size, config.byte_budget)

    log_run_result(outcome)
    return outcome
