from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ClipRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    Name: str
    ASC_SOP: str
    ASC_SAT: str


class SOPTriplet(BaseModel):
    model_config = ConfigDict(frozen=True)

    slope: str
    offset: str
    power: str


class OutputArtifact(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    content: str


class SkippedRow(BaseModel):
    line: int
    reason: str
    values: int


class ReportSummary(BaseModel):
    columns: int = 0
    data_rows: int = 0
    records: int = 0
    skipped: int = 0
    artifacts: int = 0


class ConversionReport(BaseModel):
    summary: ReportSummary
    headers: List[str] = Field(default_factory=list)
    encoding: Optional[str] = Field(default=None, examples=["utf-8"])
    skipped_rows: List[SkippedRow] = Field(default_factory=list)


class ConversionResponse(BaseModel):
    artifacts: List[OutputArtifact]
    report: ConversionReport


class ErrorDetail(BaseModel):
    kind: str
    message: str
    missing_columns: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    detail: ErrorDetail


class HealthResponse(BaseModel):
    ok: bool = True
