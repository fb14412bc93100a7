from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .models import ErrorDetail


class ErrorKind(str, Enum):
    MISSING_HEADER_SECTION = "missing_header_section"
    MISSING_REQUIRED_COLUMNS = "missing_required_columns"
    NO_VALID_RECORDS = "no_valid_records"
    INVALID_SOP_FORMAT = "invalid_sop_format"
    XML_GENERATION_FAILURE = "xml_generation_failure"
    MALFORMED_INPUT = "malformed_input"


class ValidationError(Exception):
    """
    The single failure type of a conversion.

    Any ValidationError aborts the whole document; callers get either every
    artifact or this error, never a partial result.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.MALFORMED_INPUT,
        missing_columns: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.missing_columns = list(missing_columns or [])

    def to_detail(self) -> ErrorDetail:
        return ErrorDetail(
            kind=self.kind.value,
            message=self.message,
            missing_columns=self.missing_columns,
        )
