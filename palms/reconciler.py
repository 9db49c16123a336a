"""Resolve report rows to roster members."""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .constants import FIRST_NAME_COLUMNS, LAST_NAME_COLUMNS, NAME_COLUMNS
from .models import Roster

MATCHED = 'matched'
SKIPPED = 'skipped'
UNMATCHED = 'unmatched'


@dataclass
class Resolution:
    """Where a row landed in the roster."""
    candidate: str
    status: str
    team_key: Optional[str] = None
    member_name: Optional[str] = None


def _cell_text(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _lookup(row: Mapping, columns: Iterable[str]) -> str:
    """First non-empty value among the given columns (header match ignores case)."""
    wanted = list(columns)
    by_header: dict[str, str] = {}
    for header, value in row.items():
        if not isinstance(header, str):
            continue
        folded = header.strip().lower()
        text = _cell_text(value)
        if folded in wanted and text and folded not in by_header:
            by_header[folded] = text

    for column in wanted:
        if column in by_header:
            return by_header[column]
    return ''


def extract_member_name(row: Mapping, name_columns: Optional[Iterable[str]] = None) -> str:
    """
    Pull the member name out of a report row.

    A first/last column pair wins over a single name column. Returns an
    empty string when the row carries no name.

    Examples:
        {"First": " Sajid ", "Last": "Hasan"} -> "Sajid Hasan"
        {"Member Name": "Vijay Gupta"} -> "Vijay Gupta"
    """
    first = _lookup(row, FIRST_NAME_COLUMNS)
    last = _lookup(row, LAST_NAME_COLUMNS)
    combined = ' '.join(part for part in (first, last) if part)
    if combined:
        return combined

    columns = name_columns if name_columns is not None else NAME_COLUMNS
    return _lookup(row, [c.strip().lower() for c in columns])


def find_member(roster: Roster, name: str) -> Optional[tuple[str, str]]:
    """Find (team_key, member_name) for a name, case-insensitively."""
    target = name.strip().lower()
    if not target:
        return None

    for team_key, team in roster.teams.items():
        for member_name in team.members:
            if member_name.strip().lower() == target:
                return team_key, member_name
    return None


def resolve_row(
    row: Mapping,
    roster: Roster,
    name_columns: Optional[Iterable[str]] = None,
) -> Resolution:
    """Decide which member a row refers to."""
    candidate = extract_member_name(row, name_columns)
    if not candidate:
        return Resolution(candidate='', status=SKIPPED)

    found = find_member(roster, candidate)
    if found is None:
        return Resolution(candidate=candidate, status=UNMATCHED)

    team_key, member_name = found
    return Resolution(
        candidate=candidate,
        status=MATCHED,
        team_key=team_key,
        member_name=member_name,
    )
