import io
import logging
import re
import zipfile
from urllib.parse import quote

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.responses import Response

from .config import configure_logging, get_settings
from .convert import convert_with_report
from .errors import ValidationError
from .models import ConversionResponse, ErrorDetail, ErrorResponse, HealthResponse

LOG = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings)

app = FastAPI(
    title="ale2cdl",
    description="Convert Avid Log Exchange files into ASC CDL documents",
    version="0.1.0",
)

ERROR_RESPONSES = {
    413: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}

_UNSAFE_FILENAME = re.compile(r'[^A-Za-z0-9._ -]')


def _reject(status_code: int, kind: str, message: str) -> HTTPException:
    detail = ErrorDetail(kind=kind, message=message)
    return HTTPException(status_code=status_code, detail=detail.model_dump())


async def _read_upload(file: UploadFile) -> bytes:
    if not (file.filename or "").lower().endswith(".ale"):
        raise _reject(422, "unsupported_file_type", "Only ALE files are supported")

    limit = settings.max_upload_bytes
    too_large = _reject(413, "upload_too_large", "ALE file is too large")

    if file.size is not None and file.size > limit:
        raise too_large

    # never hold more than limit + 1 bytes of an oversized upload
    raw = await file.read(limit + 1)
    if len(raw) > limit:
        raise too_large
    return raw


def _convert(filename: str, raw: bytes) -> ConversionResponse:
    try:
        return convert_with_report(raw)
    except ValidationError as exc:
        LOG.warning("%s: %s (%s)", filename, exc.message, exc.kind.value)
        raise HTTPException(status_code=422, detail=exc.to_detail().model_dump()) from exc


def content_disposition(filename: str) -> str:
    """
    Attachment header for any filename.

    Header values must be latin-1, so the plain filename= parameter gets an
    ASCII-only fallback and the real name travels in RFC 5987 filename*=.
    """
    fallback = _UNSAFE_FILENAME.sub("_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/convert", response_model=ConversionResponse, responses=ERROR_RESPONSES)
async def convert_ale(file: UploadFile = File(...)):
    raw = await _read_upload(file)
    return _convert(file.filename, raw)


@app.post("/convert/zip", responses=ERROR_RESPONSES)
async def convert_ale_zip(file: UploadFile = File(...)):
    raw = await _read_upload(file)
    result = _convert(file.filename, raw)

    # later rows win when two clips share a filename
    files = {artifact.filename: artifact.content for artifact in result.artifacts}

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in files.items():
            zf.writestr(name, content)

    stem = file.filename.rsplit(".", 1)[0]
    return Response(
        content=buf.getvalue(),
        media_type="application/zip",
        headers={"Content-Disposition": content_disposition(f"{stem}_cdl.zip")},
    )
