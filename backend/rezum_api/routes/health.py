"""Health check endpoint."""

import time

from fastapi import APIRouter

from rezum_api.services.file_store import get_file_store

router = APIRouter(tags=["System"])

_start_time = time.monotonic()


@router.get("/api/health")
async def health():
    return {
        "status": "ok",
        "service": "rezum-api",
        "version": "1.0.0",
        "uptime_seconds": round(time.monotonic() - _start_time),
        "stored_files": len(get_file_store()),
    }
