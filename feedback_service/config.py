"""Configuration for the feedback analysis development service."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from a .env file if present.
load_dotenv()


def _split_origins(value: str) -> List[str]:
    """Convert a comma-separated origin string into a clean list."""
    return [origin.strip() for origin in value.split(",") if origin.strip()]


DEFAULT_ALLOWED_ORIGINS = "http://localhost:8501,http://127.0.0.1:8501"
DEFAULT_UPLOAD_DIR = Path(__file__).resolve().parent.parent / "uploads"
DEFAULT_GEMINI_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.5-flash:generateContent"
)
MOCK_API_KEY = "TEST_KEY"

API_HOST = os.getenv("FEEDBACK_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("FEEDBACK_API_PORT", "8080"))
API_ALLOWED_ORIGINS = _split_origins(os.getenv("FEEDBACK_ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS))

# Resolve eagerly so storage code can rely on an absolute path.
UPLOAD_DIR = Path(os.getenv("FEEDBACK_UPLOAD_DIR", str(DEFAULT_UPLOAD_DIR))).resolve()
MAX_UPLOAD_BYTES = int(os.getenv("FEEDBACK_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
FILE_TTL_SECONDS = float(os.getenv("FEEDBACK_FILE_TTL_SECONDS", "3600"))

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()
GEMINI_API_URL = os.getenv("GEMINI_API_URL", DEFAULT_GEMINI_API_URL).strip() or DEFAULT_GEMINI_API_URL
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "90"))
