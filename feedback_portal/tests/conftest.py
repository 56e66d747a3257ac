from __future__ import annotations

import json
from typing import Any, Dict, Iterator

import pytest

from feedback_portal.core import config as core_config
from feedback_portal.core.models import SelectedFile, UploadState


@pytest.fixture(autouse=True)
def reset_config_cache(monkeypatch) -> Iterator[None]:
    """Reset cached configuration and pin the service URL and CAPTCHA for tests."""
    monkeypatch.setenv("FEEDBACK_API_BASE_URL", "http://testserver")
    monkeypatch.setenv("FEEDBACK_CAPTCHA_ANSWER", "12345")
    monkeypatch.delenv("FEEDBACK_UPLOAD_PATH", raising=False)
    monkeypatch.delenv("FEEDBACK_REQUEST_TIMEOUT", raising=False)
    core_config.get_config.cache_clear()
    yield
    core_config.get_config.cache_clear()


@pytest.fixture
def sample_file() -> SelectedFile:
    return SelectedFile(
        name="feedback.csv",
        content=b"student,comment\n1,Great lectures\n2,Too much homework\n",
        mime_type="text/csv",
    )


@pytest.fixture
def analytics_payload() -> Dict[str, Any]:
    return {
        "sentiment": {"positive": 5, "negative": 2, "neutral": 3},
        "keyThemes": [
            {"theme": "Instructor Clarity", "mentions": 4, "exampleQuote": "Lectures were clear."},
            {"theme": "Workload", "mentions": 2, "exampleQuote": "Too much homework."},
        ],
    }


@pytest.fixture
def wrapped_body(analytics_payload) -> str:
    return json.dumps(
        {
            "candidates": [
                {
                    "content": {
                        "parts": [{"text": json.dumps(analytics_payload)}],
                        "role": "model",
                    },
                    "finishReason": "STOP",
                }
            ]
        }
    )


@pytest.fixture
def ready_state(sample_file) -> UploadState:
    return UploadState(selected_file=sample_file, file_label=sample_file.name, captcha_input="12345")
