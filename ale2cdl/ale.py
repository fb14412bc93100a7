"""
ALE reading: locate the column header row and extract clip records.

An ALE file is tab-delimited text with labeled sections:

    Heading
    FIELD_DELIM	TABS
    Column
    Name	ASC_SOP	ASC_SAT
    Data
    A001C001.mov	(1 1 1)(0 0 0)(1 1 1)	1.0

Rows that don't fit the header (wrong value count, empty required value) are
dropped silently. Only document-level problems raise.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence

from .errors import ErrorKind, ValidationError
from .models import ClipRecord
from .rules import (
    COLUMN_MARKER,
    COMMENT_PREFIX,
    DATA_MARKER,
    FIELD_DELIMITER,
    HEADER_WINDOW,
    REQUIRED_COLUMNS,
)

LOG = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")

SKIP_COLUMN_COUNT = "column_count_mismatch"
SKIP_MISSING_VALUE = "missing_required_value"


class RowOutcome(NamedTuple):
    line: int
    values: int
    record: Optional[ClipRecord] = None
    skip_reason: Optional[str] = None


class AleDocument(NamedTuple):
    headers: List[str]
    rows: List[RowOutcome]

    @property
    def records(self) -> List[ClipRecord]:
        return [row.record for row in self.rows if row.record is not None]

    @property
    def skipped(self) -> List[RowOutcome]:
        return [row for row in self.rows if row.record is None]


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text)


def _is_content(line: str) -> bool:
    return bool(line) and not line.startswith(COMMENT_PREFIX)


def locate_header_line(lines: Sequence[str]) -> Optional[str]:
    """
    Return the trimmed header row following the first Column marker.

    Only the HEADER_WINDOW lines after the marker are considered (the marker
    line counts towards the window). Scanning stops at the first marker even
    when no header is found after it.
    """
    for i, line in enumerate(lines):
        if line.strip() != COLUMN_MARKER:
            continue
        for j in range(i + 1, min(i + HEADER_WINDOW, len(lines))):
            candidate = lines[j].strip()
            if _is_content(candidate):
                return candidate
        break
    return None


def missing_columns(headers: Sequence[str]) -> List[str]:
    return [col for col in REQUIRED_COLUMNS if col not in headers]


def read_headers(lines: Sequence[str]) -> List[str]:
    header_line = locate_header_line(lines)
    if header_line is None:
        raise ValidationError(
            "no header line located",
            kind=ErrorKind.MISSING_HEADER_SECTION,
        )

    headers = [h.strip() for h in header_line.split(FIELD_DELIMITER)]

    missing = missing_columns(headers)
    if missing:
        raise ValidationError(
            "missing required columns: " + ", ".join(missing),
            kind=ErrorKind.MISSING_REQUIRED_COLUMNS,
            missing_columns=missing,
        )
    return headers


def _build_record(fields: Dict[str, str]) -> Optional[ClipRecord]:
    if not all(fields.get(col) for col in REQUIRED_COLUMNS):
        return None
    return ClipRecord(
        Name=fields["Name"],
        ASC_SOP=fields["ASC_SOP"],
        ASC_SAT=fields["ASC_SAT"],
    )


def scan_rows(lines: Sequence[str], headers: Sequence[str]) -> Iterator[RowOutcome]:
    """Yield one outcome per candidate line of the Data section, in order."""
    reading_data = False

    for number, line in enumerate(lines, start=1):
        trimmed = line.strip()

        if trimmed == DATA_MARKER:
            reading_data = True
            continue

        if not reading_data or not _is_content(trimmed):
            continue

        values = trimmed.split(FIELD_DELIMITER)
        if len(values) != len(headers):
            LOG.debug(
                "line %d: %d values for %d columns, skipped",
                number, len(values), len(headers),
            )
            yield RowOutcome(number, len(values), skip_reason=SKIP_COLUMN_COUNT)
            continue

        fields = {
            header: (values[index] if index < len(values) else "").strip()
            for index, header in enumerate(headers)
        }

        record = _build_record(fields)
        if record is None:
            LOG.debug("line %d: empty required value, skipped", number)
            yield RowOutcome(number, len(values), skip_reason=SKIP_MISSING_VALUE)
            continue

        yield RowOutcome(number, len(values), record=record)


def parse_ale_document(text: str) -> AleDocument:
    try:
        lines = split_lines(text)
        headers = read_headers(lines)
        document = AleDocument(headers, list(scan_rows(lines, headers)))

        if not document.records:
            raise ValidationError(
                "no valid records found",
                kind=ErrorKind.NO_VALID_RECORDS,
            )
        return document
    except ValidationError:
        raise
    except Exception as exc:
        raise ValidationError(
            "invalid input format",
            kind=ErrorKind.MALFORMED_INPUT,
        ) from exc


def parse_ale_content(text: str) -> List[ClipRecord]:
    """Extract every valid clip record from ALE text, in row order."""
    return parse_ale_document(text).records
