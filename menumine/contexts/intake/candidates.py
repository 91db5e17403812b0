"""
Candidate document scoring and selection.

Documents come from a capture step that records every JSON response a menu
page makes (analytics, config, the menu itself). Each is scored:

    score = 1,000,000 * (direct day-map extraction succeeded)
          +   100,000 * (keyword appears anywhere in the document)
          + serialized byte length

The highest score wins; ties keep discovery order.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import parse_qs, urlparse

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.extraction.data_structures import ExtractionResult
from menumine.contexts.extraction.date_map import extract_from_date_map
from menumine.contexts.intake.logger import log_candidate_scored, log_candidate_skipped
from menumine.utils.json_tree import TreeDepthExceeded, to_compact_json
from menumine.utils.text_processing import utf8_len

DIRECT_RESULT_WEIGHT = 1_000_000
KEYWORD_MATCH_WEIGHT = 100_000


@dataclass
class Candidate:
    """
    One raw document under consideration.

    Attributes:
        source: Where the document came from (usually its URL)
        raw: Parsed JSON value
        byte_length: UTF-8 size of the compact serialization
        has_keyword_match: Keyword appears anywhere in the serialization
        direct_result: Day-map extraction result, if it succeeded
        order: Discovery order, used as the tie-break
        origin: "captured" or "fallback"
    """

    source: str
    raw: Any
    byte_length: int
    has_keyword_match: bool
    direct_result: Optional[ExtractionResult] = None
    order: int = 0
    origin: str = "captured"

    @property
    def has_direct_result(self) -> bool:
        return self.direct_result is not None

    @property
    def score(self) -> int:
        return (
            DIRECT_RESULT_WEIGHT * self.has_direct_result
            + KEYWORD_MATCH_WEIGHT * self.has_keyword_match
            + self.byte_length
        )


def make_candidate(
    source: str,
    raw: Any,
    start_date: str,
    config: ExtractionConfig,
    order: int = 0,
    origin: str = "captured",
) -> Candidate:
    """
    Measure a document and attempt a direct day-map extraction on it.

    Raises:
        TreeDepthExceeded: If the document nests too deep to scan
        RecursionError: If the document nests too deep to serialize
        TypeError: If raw holds non-JSON values
    """
    text = to_compact_json(raw)
    return Candidate(
        source=source,
        raw=raw,
        byte_length=utf8_len(text),
        has_keyword_match=bool(config.keyword.search(text)),
        direct_result=extract_from_date_map(raw, start_date, config),
        order=order,
        origin=origin,
    )


def gather_candidates(
    documents: Iterable[Tuple[str, Any]], start_date: str, config: ExtractionConfig
) -> List[Candidate]:
    """
    Turn (source, raw) documents into scored candidates.

    Documents smaller than config.min_document_bytes or that fail to scan are
    skipped with a log record; one bad document never stops the run.

    Args:
        documents: (source identifier, parsed JSON) pairs in discovery order
        start_date: ISO start date for direct extraction
        config: Extraction config

    Returns:
        Candidates in discovery order
    """
    candidates = []

    for order, (source, raw) in enumerate(documents):
        try:
            candidate = make_candidate(source, raw, start_date, config, order=order)
        except (TreeDepthExceeded, RecursionError, TypeError, ValueError) as e:
            log_candidate_skipped(source, str(e))
            continue

        if candidate.byte_length < config.min_document_bytes:
            log_candidate_skipped(source, f"only {candidate.byte_length} bytes")
            continue

        log_candidate_scored(candidate)
        candidates.append(candidate)

    return candidates


def rank_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    """Candidates by score descending, ties broken by discovery order."""
    return sorted(candidates, key=lambda c: (-c.score, c.order))


def select_best(candidates: Iterable[Candidate]) -> Optional[Candidate]:
    """Highest-scoring candidate, or None if there are none."""
    ranked = rank_candidates(candidates)
    return ranked[0] if ranked else None


def source_param_values(candidates: Iterable[Candidate], param: str) -> List[str]:
    """
    Unique values of a query parameter across candidate source URLs.

    Example:
        A candidate from ".../getMenu?menuId=42&x=1" contributes "42".
    """
    values = []
    for candidate in candidates:
        try:
            query = parse_qs(urlparse(candidate.source).query)
        except ValueError:
            continue
        for value in query.get(param, []):
            if value and value not in values:
                values.append(value)
    return values
