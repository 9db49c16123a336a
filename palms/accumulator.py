"""Apply recognised report cells onto a member's counters."""

import logging
import math
from typing import Mapping, Optional

from .constants import CURRENCY_DECIMALS, CURRENCY_MARKERS, CURRENCY_METRICS, HEADER_DISPLAY
from .headers import map_headers
from .models import Member

logger = logging.getLogger('palms.accumulator')


def parse_number(value) -> Optional[float]:
    """
    Parse a cell into a float, or None if it is empty or not numeric.

    Thousands separators and currency markers are ignored.

    Examples:
        "₹1,500" -> 1500.0
        " 3 " -> 3.0
        "n/a" -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().lower()
        if not text:
            return None
        for marker in CURRENCY_MARKERS:
            text = text.replace(marker, '')
        text = text.replace(',', '').replace(' ', '')
        try:
            number = float(text)
        except ValueError:
            return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_value(value, metric_key: str):
    """
    Turn a cell into the amount to add to ``metric_key``, or None to skip it.

    Empty, non-numeric, zero and negative cells are skipped. Count metrics
    are truncated to whole numbers; currency metrics are taken to the cent.
    """
    number = parse_number(value)
    if number is None or number <= 0:
        return None

    if metric_key in CURRENCY_METRICS:
        amount = round(number, CURRENCY_DECIMALS)
        return amount if amount > 0 else None

    count = int(number)
    return count if count > 0 else None


def apply_row(
    member: Member,
    row: Mapping,
    header_map: Optional[Mapping[str, str]] = None,
) -> list[str]:
    """
    Add every recognised metric in ``row`` to ``member``'s counters.

    Values accumulate on top of what is already stored. Malformed cells
    never raise; they contribute nothing and are reported back.

    Args:
        member: Member to update in place
        row: Report row mapping header -> cell value
        header_map: Precomputed header -> metric key map (computed from the row if omitted)

    Returns:
        Notes about cells in recognised columns that could not be parsed
    """
    if header_map is None:
        header_map = map_headers(row.keys())

    notes = []
    for header, key in header_map.items():
        if header not in row:
            continue
        raw = row[header]
        amount = coerce_value(raw, key)
        if amount is None:
            if parse_number(raw) is None and raw is not None and str(raw).strip():
                notes.append(
                    f'{member.name}: ignored non-numeric {HEADER_DISPLAY[key]} value {str(raw).strip()!r}'
                )
            continue
        member.stats.add(key, amount)

    for note in notes:
        logger.debug(note)
    return notes
