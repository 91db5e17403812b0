"""
Bounded fallback probing.

When no captured document yields a direct day-map result, a small ordered set
of alternate requests is tried one at a time: for each menu identifier seen
in the captured URLs, the alternate endpoint is asked for the start date plus
each configured day offset, lowest offset first. The first probe that yields
a non-empty day-map extraction wins.

Probes are sequential so the first success is deterministic and upstream load
stays bounded. A failed probe is logged and skipped.
"""

import threading
from dataclasses import dataclass
from typing import Iterable, List, Optional

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.intake.candidates import Candidate, make_candidate, source_param_values
from menumine.contexts.intake.fetcher import Fetcher
from menumine.contexts.intake.logger import _log_info, log_probe_failed
from menumine.exceptions import FallbackProbeFailed
from menumine.utils.timestamp import add_days_iso, iso_to_us_date


@dataclass(frozen=True)
class FallbackProbe:
    """One alternate request: a menu identifier at a day offset."""

    url: str
    menu_id: str
    offset: int
    date: str


def build_fallback_probes(
    candidates: Iterable[Candidate], start_date: str, config: ExtractionConfig
) -> List[FallbackProbe]:
    """
    Ordered probe list: identifiers in discovery order, offsets ascending.

    The URL template may use {menu_id}, {iso_date} and {us_date}.

    Returns:
        Probes to try, or [] if no template is configured or no identifier was seen
    """
    if not config.fallback_url_template:
        return []

    probes = []
    for menu_id in source_param_values(candidates, config.fallback_id_param):
        for offset in sorted(set(config.fallback_offsets)):
            day = add_days_iso(start_date, offset)
            url = config.fallback_url_template.format(
                menu_id=menu_id, iso_date=day, us_date=iso_to_us_date(day)
            )
            probes.append(FallbackProbe(url=url, menu_id=menu_id, offset=offset, date=day))
    return probes


def probe_fallbacks(
    probes: Iterable[FallbackProbe],
    fetch: Fetcher,
    start_date: str,
    config: ExtractionConfig,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[Candidate]:
    """
    Try probes sequentially until one yields a direct day-map result.

    Args:
        probes: Probes in priority order
        fetch: (url, timeout) -> parsed JSON. Any exception it raises is logged
            and the next URL is tried
        start_date: ISO start date for extraction
        config: Extraction config (probe timeout)
        cancel_event: Checked before each fetch; when set, probing stops

    Returns:
        Winning candidate (origin "fallback"), or None
    """
    for order, probe in enumerate(probes):
        if cancel_event is not None and cancel_event.is_set():
            _log_info("fallback probing cancelled")
            return None

        try:
            raw = fetch(probe.url, config.probe_timeout_s)
            candidate = make_candidate(
                probe.url, raw, start_date, config, order=order, origin="fallback"
            )
        except FallbackProbeFailed as e:
            log_probe_failed(probe.url, e)
            continue
        except Exception as e:
            # Injected fetchers may raise their own transport errors
            log_probe_failed(probe.url, FallbackProbeFailed(probe.url, e))
            continue

        if candidate.has_direct_result:
            _log_info(f"fallback probe hit: menu {probe.menu_id} at +{probe.offset}d")
            return candidate

    return None
