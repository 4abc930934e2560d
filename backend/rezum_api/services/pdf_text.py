"""Text extraction from stored PDF uploads via pypdf."""

import asyncio
import io

from pypdf import PdfReader

from rezum_api.core.logger import logger
from rezum_api.services.file_store import get_file_store


class PdfTextError(Exception):
    """Raised when bytes cannot be parsed as a PDF."""


def extract_pdf_text(data: bytes) -> str:
    """Return the text of every page, joined by newlines.

    Pages without a text layer (scanned images) contribute an empty string.
    Raises PdfTextError if ``data`` is not a readable PDF.
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        # pypdf raises outside its own hierarchy on malformed input,
        # e.g. NotImplementedError for an unknown stream filter
        raise PdfTextError(str(e) or type(e).__name__) from e
    return "\n".join(pages)


async def extract_text(file_id: str) -> str | None:
    """Extract text from a stored upload.

    Returns None when the file is unknown or is not a readable PDF; the
    two cases are only distinguishable in the logs.
    """
    stored = get_file_store().get(file_id)
    if stored is None:
        return None

    try:
        text = await asyncio.to_thread(extract_pdf_text, stored.data)
    except PdfTextError as e:
        logger.warning(f"PDF text extraction failed for {file_id}: {e}")
        return None

    logger.info(f"Extracted {len(text)} chars from {file_id}")
    return text
