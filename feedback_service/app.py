"""FastAPI application serving the feedback upload endpoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .analytics import AnalyticsServiceError
from .config import API_ALLOWED_ORIGINS, API_HOST, API_PORT
from .logging_config import configure_logging
from .models import ErrorResponse, HealthResponse
from .routes import router
from .storage import UploadRejected

configure_logging()
LOGGER = logging.getLogger(__name__)
LOGGER.info("Creating Student Feedback Analytics FastAPI application")

app = FastAPI(
    title="Student Feedback Analytics API",
    version="1.0.0",
    description="Accepts feedback CSV uploads and returns sentiment and theme analytics.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=API_ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(UploadRejected)
async def handle_upload_rejected(request: Request, exc: UploadRejected) -> JSONResponse:
    LOGGER.warning("Rejected upload: %s", exc)
    return _error(400, str(exc))


@app.exception_handler(AnalyticsServiceError)
async def handle_analytics_error(request: Request, exc: AnalyticsServiceError) -> JSONResponse:
    LOGGER.error("Analytics failed: %s", exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    LOGGER.warning("Malformed upload request: %s", exc.errors())
    return _error(400, "A CSV file must be provided in the 'file' field.")


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Handled unexpected exception")
    return _error(500, "An unexpected error occurred.")


@app.get("/health", tags=["health"], response_model=HealthResponse)
def healthcheck() -> HealthResponse:
    """Report a simple OK status used for readiness checks."""
    return HealthResponse(status="ok")


if __name__ == "__main__":
    import uvicorn

    LOGGER.info("Launching Uvicorn development server on %s:%s", API_HOST, API_PORT)
    uvicorn.run("feedback_service.app:app", host=API_HOST, port=API_PORT, reload=True)
