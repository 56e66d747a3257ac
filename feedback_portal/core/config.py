from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables once so both Streamlit and tests share the same defaults.
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")
load_dotenv()

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_UPLOAD_PATH = "/api/data/upload"
DEFAULT_REQUEST_TIMEOUT = 120.0
DEFAULT_CAPTCHA_ANSWER = "12345"

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Frontend configuration derived from the environment."""

    api_base_url: str = DEFAULT_API_BASE_URL
    upload_path: str = DEFAULT_UPLOAD_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    captcha_answer: str = DEFAULT_CAPTCHA_ANSWER
    log_level: str = "INFO"

    @property
    def upload_url(self) -> str:
        """Absolute URL of the analysis upload endpoint."""
        path = self.upload_path if self.upload_path.startswith("/") else f"/{self.upload_path}"
        return f"{self.api_base_url.rstrip('/')}{path}"


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        _LOGGER.warning("Ignoring invalid %s=%r; using %s", name, raw, default)
        return default
    if value <= 0:
        _LOGGER.warning("Ignoring non-positive %s=%r; using %s", name, raw, default)
        return default
    return value


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Return the cached application configuration."""
    base_url = os.getenv("FEEDBACK_API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL
    upload_path = os.getenv("FEEDBACK_UPLOAD_PATH", "").strip() or DEFAULT_UPLOAD_PATH
    # An empty answer would make the gate accept blank input, so keep the default instead.
    captcha_answer = os.getenv("FEEDBACK_CAPTCHA_ANSWER", "").strip() or DEFAULT_CAPTCHA_ANSWER
    log_level = os.getenv("FEEDBACK_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    return AppConfig(
        api_base_url=base_url,
        upload_path=upload_path,
        request_timeout=_float_from_env("FEEDBACK_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        captcha_answer=captcha_answer,
        log_level=log_level,
    )
