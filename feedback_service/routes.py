"""API routes for the feedback analysis service."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from .analytics import AnalyticsClient
from .models import ErrorResponse
from .storage import FileStorage

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/api/data")


@lru_cache(maxsize=1)
def get_file_storage() -> FileStorage:
    return FileStorage()


@lru_cache(maxsize=1)
def get_analytics_client() -> AnalyticsClient:
    return AnalyticsClient()


@router.post(
    "/upload",
    response_class=PlainTextResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def upload_feedback(
    file: UploadFile = File(...),
    captcha: Optional[str] = Form(default=None),
    storage: FileStorage = Depends(get_file_storage),
    analytics: AnalyticsClient = Depends(get_analytics_client),
) -> PlainTextResponse:
    """Analyse an uploaded feedback CSV.

    Args:
        file (UploadFile): The CSV selected in the portal.
        captcha (str): The CAPTCHA answer; the portal checks it before sending.
    Returns:
        PlainTextResponse: The analysis body exactly as the LLM produced it.
    Raises:
        UploadRejected: When the file is too large, empty, or not a CSV.
        AnalyticsServiceError: When the LLM is not configured or unreachable.
    """
    LOGGER.info("Received file upload request for %s", file.filename)
    if captcha is None:
        LOGGER.debug("Upload for %s arrived without a CAPTCHA field", file.filename)

    # One byte past the cap is enough for validation to reject an oversized file.
    raw_bytes = await file.read(storage.max_bytes + 1)
    stored_path = await run_in_threadpool(storage.store, file.filename, file.content_type, raw_bytes)
    try:
        csv_text = raw_bytes.decode("utf-8", errors="replace")
        result = await run_in_threadpool(analytics.analyze, csv_text)
        LOGGER.info("Received analysis result for %s", file.filename)
    finally:
        await run_in_threadpool(storage.delete, stored_path)

    return PlainTextResponse(result)
