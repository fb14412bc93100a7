"""
Top-level ALE → CDL conversion.

Responsibilities:
- decode uploaded bytes to text
- extract clip records from the ALE text
- render one CDL document per record
- summarize the run in a report

Each call works on its own in-memory copy of the document; nothing is cached
between calls.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from charset_normalizer import from_bytes

from .ale import AleDocument, parse_ale_document
from .cdl import build_artifact
from .errors import ErrorKind, ValidationError
from .models import (
    ConversionReport,
    ConversionResponse,
    OutputArtifact,
    ReportSummary,
    SkippedRow,
)

LOG = logging.getLogger(__name__)


def decode_ale_bytes(raw: bytes) -> Tuple[str, str]:
    """
    Decode raw ALE bytes, returning (text, encoding used).

    UTF-8 (with or without BOM) is tried first. Anything else falls back to
    charset-normalizer's best guess.
    """
    try:
        return raw.decode("utf-8-sig"), "utf-8"
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise ValidationError("invalid input format", kind=ErrorKind.MALFORMED_INPUT)

    LOG.info("input is not UTF-8, decoding as %s", match.encoding)
    return str(match), match.encoding


def _artifacts(document: AleDocument) -> List[OutputArtifact]:
    return [build_artifact(record) for record in document.records]


def convert_ale_text(text: str) -> List[OutputArtifact]:
    """Convert ALE text into one CDL artifact per valid data row."""
    return _artifacts(parse_ale_document(text))


def convert_ale_bytes(raw: Union[bytes, str]) -> List[OutputArtifact]:
    if isinstance(raw, bytes):
        raw, _ = decode_ale_bytes(raw)
    return convert_ale_text(raw)


def build_report(
    document: AleDocument,
    artifacts: List[OutputArtifact],
    encoding: Optional[str] = None,
) -> ConversionReport:
    skipped = document.skipped
    return ConversionReport(
        summary=ReportSummary(
            columns=len(document.headers),
            data_rows=len(document.rows),
            records=len(document.rows) - len(skipped),
            skipped=len(skipped),
            artifacts=len(artifacts),
        ),
        headers=document.headers,
        encoding=encoding,
        skipped_rows=[
            SkippedRow(line=row.line, reason=row.skip_reason, values=row.values)
            for row in skipped
        ],
    )


def convert_with_report(raw: Union[bytes, str]) -> ConversionResponse:
    encoding = None
    if isinstance(raw, bytes):
        raw, encoding = decode_ale_bytes(raw)

    document = parse_ale_document(raw)
    artifacts = _artifacts(document)

    LOG.info(
        "converted %d records (%d rows skipped)",
        len(artifacts), len(document.skipped),
    )
    return ConversionResponse(
        artifacts=artifacts,
        report=build_report(document, artifacts, encoding),
    )
