"""Read PALMS report files (CSV or Excel) into header -> value rows."""

import csv
import io
import logging
import re
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

import openpyxl

from .errors import EmptyUploadError, FileDecodeError

logger = logging.getLogger('palms.file_reader')

MAX_FILE_SIZE = 10 * 1024 * 1024
CSV_EXTENSIONS = {'csv'}
EXCEL_EXTENSIONS = {'xlsx', 'xlsm'}
VALID_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS
CSV_DELIMITERS = ',\t|;'
SPECIAL_CHARS = re.compile(r'[<>:"/\\|?*]')


@dataclass
class FileValidationResult:
    """Outcome of pre-upload file checks."""
    is_valid: bool
    file_type: str
    file_size: int
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_file(path: Path | str) -> FileValidationResult:
    """
    Check an uploaded report before decoding it.

    Checks:
    - File exists and is at most 10MB
    - Extension is csv, xlsx or xlsm
    - Warn on very long names or special characters
    """
    path = Path(path)
    errors = []
    warnings = []
    file_type = path.suffix.lower().lstrip('.') or 'unknown'

    size = path.stat().st_size if path.exists() else 0
    if not path.exists():
        errors.append(f'File not found: {path}')
    elif size > MAX_FILE_SIZE:
        errors.append('File size exceeds 10MB limit')

    if file_type not in VALID_EXTENSIONS:
        errors.append('Invalid file type. Please upload CSV or Excel (.xlsx) files only.')

    if len(path.name) > 255:
        warnings.append('File name is very long and may cause issues')
    if SPECIAL_CHARS.search(path.name):
        warnings.append('File name contains special characters that may cause issues')

    return FileValidationResult(
        is_valid=not errors,
        file_type=file_type,
        file_size=size,
        errors=errors,
        warnings=warnings,
    )


def _rows_from_table(table: list[list]) -> list[dict]:
    """Turn a header row plus data rows into dicts, dropping blank rows."""
    if not table:
        return []

    headers = ['' if h is None else str(h).strip() for h in table[0]]
    rows = []
    for values in table[1:]:
        if all(v is None or str(v).strip() == '' for v in values):
            continue
        row = {}
        for idx, header in enumerate(headers):
            if not header:
                continue
            value = values[idx] if idx < len(values) else ''
            row[header] = '' if value is None else value
        rows.append(row)
    return rows


def read_csv_rows(path: Path | str) -> list[dict]:
    """
    Read a delimited text report.

    The delimiter is sniffed among comma, tab, pipe and semicolon; the
    first non-blank line is the header row.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8-sig')
    except (OSError, UnicodeDecodeError) as e:
        raise FileDecodeError(f'Failed to read CSV {path.name}: {e}') from e

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise EmptyUploadError(f'CSV file {path.name} is empty')

    try:
        dialect = csv.Sniffer().sniff(lines[0], delimiters=CSV_DELIMITERS)
        delimiter = dialect.delimiter
    except csv.Error:
        delimiter = ','

    try:
        table = list(csv.reader(io.StringIO('\n'.join(lines)), delimiter=delimiter))
    except csv.Error as e:
        raise FileDecodeError(f'CSV parsing error in {path.name}: {e}') from e

    return _rows_from_table(table)


def read_excel_rows(path: Path | str) -> list[dict]:
    """Read the first worksheet of an Excel report."""
    path = Path(path)
    try:
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    except (OSError, KeyError, ValueError, zipfile.BadZipFile) as e:
        raise FileDecodeError(f'Failed to parse Excel file {path.name}: {e}') from e

    try:
        if not wb.sheetnames:
            raise FileDecodeError(f'Excel file {path.name} has no sheets')
        ws = wb[wb.sheetnames[0]]
        table = [
            list(values) for values in ws.iter_rows(values_only=True)
            if any(v is not None and str(v).strip() != '' for v in values)
        ]
    finally:
        wb.close()

    if not table:
        raise EmptyUploadError(f'Excel sheet in {path.name} is empty')
    return _rows_from_table(table)


def read_rows(path: Path | str) -> list[dict]:
    """
    Validate and decode a report file into rows.

    Raises:
        FileDecodeError: If the file is invalid or cannot be decoded
        EmptyUploadError: If the file has a header but no data rows
    """
    path = Path(path)
    validation = validate_file(path)
    for warning in validation.warnings:
        logger.warning(f'{path.name}: {warning}')
    if not validation.is_valid:
        raise FileDecodeError(', '.join(validation.errors))

    if validation.file_type in CSV_EXTENSIONS:
        rows = read_csv_rows(path)
    else:
        rows = read_excel_rows(path)

    if not rows:
        raise EmptyUploadError(f'{path.name} contains no data rows')

    logger.debug(f'Read {len(rows)} rows from {path.name}')
    return rows


def generate_sample_csv() -> str:
    """Sample PALMS report in the column layout the scorer recognises."""
    headers = ['Name', 'P', 'A', 'L', 'RGI', 'RGO', 'V', '1-2-1', 'TYFCB']
    sample_data = [
        ['Sajid Hasan', '4', '0', '1', '3', '2', '1', '2', '1'],
        ['Prannav Khanna', '5', '0', '0', '2', '1', '0', '1', '0'],
        ['Vijay Gupta', '3', '1', '1', '1', '3', '2', '1', '1'],
        ['Himanshu Sharma', '4', '0', '0', '4', '1', '1', '3', '2'],
        ['Abhinav Gupta', '5', '0', '0', '3', '2', '2', '2', '1'],
    ]
    return '\n'.join(','.join(row) for row in [headers, *sample_data])
