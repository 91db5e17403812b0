"""
Text processing utilities for labels and payload strings.
"""

import re
import unicodedata

# Single-character marker appended to cut strings
ELLIPSIS = "…"

# Glyphs that carry no meaning in a section label
TRADEMARK_GLYPHS = "™®℠©"

_WHITESPACE = re.compile(r"\s+")
_TRADEMARKS = re.compile(f"[{TRADEMARK_GLYPHS}]")


def utf8_len(text: str) -> int:
    """Length of text in UTF-8 bytes."""
    return len(text.encode("utf-8"))


def collapse_whitespace(text: str) -> str:
    """
    Collapse runs of whitespace to single spaces and trim.

    Example:
        >>> collapse_whitespace("  Soup \\n of   the Day ")
        'Soup of the Day'
    """
    return _WHITESPACE.sub(" ", text).strip()


def strip_diacritics(text: str) -> str:
    """
    Remove combining accents while keeping base characters.

    Example:
        >>> strip_diacritics("Entrée Crêpes")
        'Entree Crepes'
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def remove_trademark_glyphs(text: str) -> str:
    """Drop ™, ®, ℠ and © glyphs."""
    return _TRADEMARKS.sub("", text)


def clean_label(text: str) -> str:
    """
    Normalize a free-form label for grouping and display.

    Trademark glyphs are removed before NFKD decomposition, which would
    otherwise expand ™ into the letters "TM".
    """
    text = remove_trademark_glyphs(text)
    text = strip_diacritics(text)
    return collapse_whitespace(text)


def truncate_text(value, max_chars: int) -> str:
    """
    Collapse whitespace and cut text to at most max_chars characters.

    Cut text ends in a single ellipsis character. The cut point is chosen so
    that the result is never longer in UTF-8 bytes than the uncut text, which
    keeps payload size non-increasing as limits shrink.

    With max_chars >= 2 every cut carries the ellipsis. Below that, text of
    one or two bytes is cut bare, since the 3-byte marker would grow it.

    Args:
        value: Text to truncate (non-strings become "")
        max_chars: Maximum length in characters, ellipsis included

    Returns:
        Cleaned text if it fits, otherwise a shortened version

    Example:
        >>> truncate_text("Grilled   Chicken Sandwich", 12)
        'Grilled Chi…'
    """
    if not isinstance(value, str):
        return ""

    cleaned = collapse_whitespace(value)
    if len(cleaned) <= max_chars:
        return cleaned
    if max_chars <= 0:
        return ""

    byte_budget = utf8_len(cleaned) - utf8_len(ELLIPSIS)
    if byte_budget < 0:
        # Too short to carry the marker without growing
        return cleaned[:max_chars]

    keep = max_chars - 1
    while keep > 0 and utf8_len(cleaned[:keep]) > byte_budget:
        keep -= 1

    return cleaned[:keep].rstrip() + ELLIPSIS
