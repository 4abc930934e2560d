"""Upload endpoints: in-memory PDF storage, text extraction and ATS analysis."""

from urllib.parse import quote

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from fastapi.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from rezum_api.core.constants import ANALYZE_RATE_LIMIT_PER_MINUTE, MAX_UPLOAD_SIZE
from rezum_api.core.langfuse_client import flush
from rezum_api.core.logger import logger
from rezum_api.models import (
    FileListResponse,
    FileSummary,
    MessageResponse,
    ResumeAnalysis,
    TextResponse,
    UploadResponse,
)
from rezum_api.services.file_store import StoredFile, get_file_store
from rezum_api.services.pdf_text import extract_text
from rezum_api.services.resume_analyzer import analyze_resume

router = APIRouter(prefix="/api/v1/upload", tags=["Upload"])
limiter = Limiter(key_func=get_remote_address)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_or_404(file_id: str) -> StoredFile:
    stored = get_file_store().get(file_id)
    if stored is None:
        raise HTTPException(status_code=404, detail="File not found")
    return stored


def _content_disposition(filename: str) -> str:
    """Build an attachment header, with an RFC 5987 name for non-ASCII filenames."""
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("", response_model=UploadResponse)
async def upload_file(file: UploadFile | None = File(default=None)):
    """Store an uploaded file and return its id."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    data = await file.read()
    if len(data) >= MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size is {MAX_UPLOAD_SIZE // (1024 * 1024)}MB.",
        )

    filename = file.filename or "upload"
    mimetype = file.content_type or "application/octet-stream"
    file_id = get_file_store().store(filename, data, mimetype)

    return UploadResponse(
        file_id=file_id,
        filename=filename,
        size=len(data),
        mimetype=mimetype,
    )


@router.get("", response_model=FileListResponse)
async def list_files():
    files = get_file_store().list_files()
    return FileListResponse(
        files=[FileSummary(file_id=f.file_id, size=f.size) for f in files],
    )


@router.get("/text/{file_id}", response_model=TextResponse)
async def get_file_text(file_id: str):
    """Extracted text of a stored PDF."""
    _get_or_404(file_id)

    text = await extract_text(file_id)
    if text is None:
        raise HTTPException(status_code=404, detail="File is not a readable PDF")

    return TextResponse(text=text)


@router.get("/analyze/{file_id}", response_model=ResumeAnalysis)
@limiter.limit(f"{ANALYZE_RATE_LIMIT_PER_MINUTE}/minute")
async def analyze_file(request: Request, file_id: str):
    """ATS feedback for a stored resume PDF."""
    _get_or_404(file_id)
    logger.info(f"Analyzing resume {file_id}")

    try:
        result = await analyze_resume(file_id)
    finally:
        flush()

    if result is None:
        raise HTTPException(status_code=404, detail="Resume analysis failed")

    return result


@router.get("/{file_id}")
async def download_file(file_id: str):
    """Raw bytes of a stored upload."""
    stored = _get_or_404(file_id)
    return Response(
        content=stored.data,
        media_type="application/octet-stream",
        headers={"Content-Disposition": _content_disposition(stored.filename)},
    )


@router.delete("/{file_id}", response_model=MessageResponse)
async def delete_file(file_id: str):
    if not get_file_store().delete(file_id):
        raise HTTPException(status_code=404, detail="File not found")
    return MessageResponse(message="File deleted successfully")
