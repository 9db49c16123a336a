"""Apply uploaded PALMS report rows to a roster."""

import logging
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .accumulator import apply_row
from .errors import UploadError
from .file_reader import read_rows
from .headers import map_headers
from .models import ProcessingResult, Roster
from .reconciler import MATCHED, SKIPPED, resolve_row

logger = logging.getLogger('palms.uploader')


def apply_rows(
    roster: Roster,
    rows: Iterable[Mapping],
    name_columns: Optional[Iterable[str]] = None,
) -> ProcessingResult:
    """
    Reconcile and accumulate every row onto ``roster`` in place.

    Callers that need all-or-nothing behaviour pass a working copy
    (see RosterStore.process_upload). Blank rows are counted as processed
    but not matched; rows naming unknown members are reported as unmatched.

    Returns:
        ProcessingResult with counts, unmatched names and row errors
    """
    if name_columns is not None:
        name_columns = list(name_columns)

    result = ProcessingResult()
    header_maps: dict[tuple, dict[str, str]] = {}

    for row_number, row in enumerate(rows, start=1):
        result.rows_processed += 1

        if not isinstance(row, Mapping):
            result.errors.append(f'Row {row_number}: expected a header -> value mapping, got {type(row).__name__}')
            continue

        resolution = resolve_row(row, roster, name_columns)
        if resolution.status == SKIPPED:
            continue
        if resolution.status != MATCHED:
            logger.warning(f'Member "{resolution.candidate}" not found in any team')
            result.unmatched.append(resolution.candidate)
            continue

        headers = tuple(row.keys())
        if headers not in header_maps:
            header_maps[headers] = map_headers(headers)

        member = roster.teams[resolution.team_key].data[resolution.member_name]
        notes = apply_row(member, row, header_maps[headers])
        result.errors.extend(f'Row {row_number}: {note}' for note in notes)
        result.rows_matched += 1

    return result


def upload_file(store, path: Path | str) -> ProcessingResult:
    """
    Decode a report file and apply it to a RosterStore as one batch.

    Decoding failures produce a failed result and leave the roster untouched.
    """
    path = Path(path)
    try:
        rows = read_rows(path)
    except UploadError as e:
        logger.error(f'Upload of {path.name} failed: {e}')
        return ProcessingResult(success=False, message=str(e))

    return store.process_upload(rows, source=path.name)
