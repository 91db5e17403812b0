"""
JSON fetching for fallback probes.
"""

from typing import Any, Callable, Optional

import requests

from menumine.exceptions import FallbackProbeFailed

# Signature of a probe fetcher: (url, timeout seconds) -> parsed JSON
Fetcher = Callable[[str, float], Any]

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome Safari",
}


def fetch_json(url: str, timeout_s: float, session: Optional[requests.Session] = None) -> Any:
    """
    GET a URL and decode its JSON body.

    Args:
        url: Probe URL
        timeout_s: Per-request timeout in seconds
        session: Optional requests session to reuse connections

    Returns:
        Parsed JSON value

    Raises:
        FallbackProbeFailed: On timeout, transport error, HTTP error status or invalid JSON
    """
    http = session or requests
    try:
        response = http.get(url, headers=DEFAULT_HEADERS, timeout=timeout_s)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise FallbackProbeFailed(url, e) from e
    except ValueError as e:
        raise FallbackProbeFailed(url, e) from e
