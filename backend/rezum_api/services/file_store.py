"""In-memory store for uploaded files.

Bytes live for the lifetime of the process: no persistence, no eviction.
The map is guarded by a lock so it is safe to touch from worker threads.
"""

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from rezum_api.core.logger import logger


@dataclass(frozen=True)
class StoredFile:
    file_id: str
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def size(self) -> int:
        return len(self.data)


class FileStore:
    def __init__(self) -> None:
        self._files: dict[str, StoredFile] = {}
        self._lock = threading.Lock()

    def store(self, filename: str, data: bytes, content_type: str | None = None) -> str:
        """Keep ``data`` under a fresh id and return the id."""
        file_id = uuid.uuid4().hex
        stored = StoredFile(
            file_id=file_id,
            filename=filename,
            data=data,
            content_type=content_type or "application/octet-stream",
        )
        with self._lock:
            self._files[file_id] = stored
        logger.info(f"Stored file {file_id}: filename='{filename}', size={stored.size}")
        return file_id

    def get(self, file_id: str) -> StoredFile | None:
        with self._lock:
            return self._files.get(file_id)

    def list_files(self) -> list[StoredFile]:
        """All stored files in upload order."""
        with self._lock:
            return list(self._files.values())

    def delete(self, file_id: str) -> bool:
        with self._lock:
            removed = self._files.pop(file_id, None)
        if removed is not None:
            logger.info(f"Deleted file {file_id}")
        return removed is not None

    def clear(self) -> None:
        with self._lock:
            self._files.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)


_store = FileStore()


def get_file_store() -> FileStore:
    """Process-wide file store."""
    return _store
