"""HTTP client for the rezum backend API.

Base URL comes from BACKEND_API_URL, same as the backend's own .env
convention.
"""

import os

import httpx

DEFAULT_BASE_URL = "http://localhost:8001/api/v1"
MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # mirrors the backend limit

# Analysis waits on an LLM round trip
_DEFAULT_TIMEOUT = httpx.Timeout(30.0)
_ANALYZE_TIMEOUT = httpx.Timeout(30.0, read=180.0)


class BackendError(Exception):
    """Non-2xx response from the backend."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        detail = response.json().get("detail", response.text)
    except ValueError:
        detail = response.text or response.reason_phrase
    raise BackendError(response.status_code, str(detail))


class RezumApi:
    def __init__(self, base_url: str | None = None, transport: httpx.BaseTransport | None = None):
        self.base_url = (base_url or os.getenv("BACKEND_API_URL", DEFAULT_BASE_URL)).rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=_DEFAULT_TIMEOUT, transport=transport)

    def close(self) -> None:
        self._client.close()

    def upload_file(self, filename: str, data: bytes, content_type: str = "application/pdf") -> dict:
        """POST the file; returns {message, fileId, filename, size, mimetype}."""
        response = self._client.post("/upload", files={"file": (filename, data, content_type)})
        _raise_for_status(response)
        return response.json()

    def list_files(self) -> list[dict]:
        response = self._client.get("/upload")
        _raise_for_status(response)
        return response.json()["files"]

    def download(self, file_id: str) -> bytes:
        response = self._client.get(f"/upload/{file_id}")
        _raise_for_status(response)
        return response.content

    def extract_text(self, file_id: str) -> str:
        response = self._client.get(f"/upload/text/{file_id}")
        _raise_for_status(response)
        return response.json()["text"]

    def analyze(self, file_id: str) -> dict:
        """Returns {analysis, fileId, extractedText, atsScore}."""
        response = self._client.get(f"/upload/analyze/{file_id}", timeout=_ANALYZE_TIMEOUT)
        _raise_for_status(response)
        return response.json()

    def delete_file(self, file_id: str) -> None:
        response = self._client.delete(f"/upload/{file_id}")
        _raise_for_status(response)


def score_band(score: int | None) -> tuple[str, str] | None:
    """(label, streamlit colour) for an ATS score."""
    if score is None:
        return None
    if score >= 80:
        return "Excellent", "green"
    if score >= 60:
        return "Good", "orange"
    return "Needs Improvement", "red"


def preview_bytes(api: RezumApi, file_id: str, uploaded: dict | None = None) -> bytes | None:
    """PDF bytes for the results-page preview.

    Prefers the bytes kept in the uploading session; otherwise downloads the
    stored file so reloaded or shared result pages still show it.
    """
    if uploaded and uploaded.get("file_id") == file_id:
        return uploaded["data"]
    try:
        return api.download(file_id)
    except (BackendError, httpx.HTTPError):
        return None
