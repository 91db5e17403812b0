"""
Intake Context

Responsibilities:
- Scores captured JSON documents and selects the most promising one
- Builds and runs bounded, sequential fallback probes against an alternate endpoint
- Fetches probe JSON with a per-request timeout

Owns: Candidate scoring, fallback probe ordering
Never: Builds payloads or decides section ordering
"""

from menumine.contexts.intake.candidates import (
    Candidate,
    gather_candidates,
    rank_candidates,
    select_best,
)
from menumine.contexts.intake.fallback import (
    FallbackProbe,
    build_fallback_probes,
    probe_fallbacks,
)
from menumine.contexts.intake.fetcher import fetch_json

__all__ = [
    "Candidate",
    "gather_candidates",
    "rank_candidates",
    "select_best",
    "FallbackProbe",
    "build_fallback_probes",
    "probe_fallbacks",
    "fetch_json",
]
