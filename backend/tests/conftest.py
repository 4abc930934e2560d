"""Shared fixtures for rezum backend tests."""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from httpx import ASGITransport, AsyncClient

from rezum_api.main import app
from rezum_api.routes import upload as upload_route
from rezum_api.services.file_store import get_file_store


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Disable slowapi rate limiting for all tests."""
    app.state.limiter.enabled = False
    upload_route.limiter.enabled = False
    yield
    app.state.limiter.enabled = True
    upload_route.limiter.enabled = True


@pytest.fixture(autouse=True)
def _clear_file_store():
    """Every test starts with an empty in-memory store."""
    get_file_store().clear()
    yield
    get_file_store().clear()


@pytest.fixture
async def client():
    """Async httpx test client wired to the FastAPI app via ASGI transport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# PDF fixtures
# ---------------------------------------------------------------------------

RESUME_LINE = "Jane Doe Senior Python Engineer FastAPI Kubernetes"


def make_pdf(text: str | None = RESUME_LINE) -> bytes:
    """Build a minimal single-page PDF with one line of Helvetica text.

    ``text=None`` produces a page with no text layer, like a scanned resume.
    """
    if text is None:
        stream = b""
    else:
        stream = f"BT /F1 18 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


@pytest.fixture()
def sample_pdf() -> bytes:
    return make_pdf()


@pytest.fixture()
def blank_pdf() -> bytes:
    return make_pdf(None)
