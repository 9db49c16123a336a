"""Column header normalization for PALMS report exports."""

from typing import Iterable, Optional

from .constants import HEADER_ALIASES, HEADER_DISPLAY


def normalize_header(header) -> Optional[str]:
    """
    Map a report column header to a canonical metric key.

    Headers are lower-cased and trimmed, then tested against the ordered
    alias table. Single-character codes (P, A, L, M, S, V, I) only match
    exactly, so 'L' means late but 'Last Name' does not.

    Examples:
        "P" -> "present"
        "Referrals Given Outside" -> "rgo"
        "Thank You For Closed Business" -> "tyfcb"
        "Chapter" -> None
    """
    if not isinstance(header, str):
        return None

    text = header.strip().lower()
    if not text:
        return None

    for key, aliases in HEADER_ALIASES:
        for alias in aliases:
            if len(alias) == 1:
                if text == alias:
                    return key
            elif alias in text:
                return key
    return None


def display_header(key: str) -> str:
    """Canonical column label for a metric key."""
    try:
        return HEADER_DISPLAY[key]
    except KeyError:
        raise ValueError(f'Unknown metric: {key}') from None


def map_headers(headers: Iterable) -> dict[str, str]:
    """Map each recognised header to its metric key, in input order."""
    mapping = {}
    for header in headers:
        key = normalize_header(header)
        if key is not None:
            mapping[header] = key
    return mapping
