"""Client for the LLM that turns feedback CSV data into analytics."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import GEMINI_API_KEY, GEMINI_API_URL, GEMINI_TIMEOUT_SECONDS, MOCK_API_KEY
from .models import FeedbackAnalytics, KeyTheme, SentimentCounts

LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert in educational data analysis. Analyze the following student feedback data. "
    "Provide a summary including: "
    "1. Overall sentiment breakdown (positive, negative, neutral) as percentages "
    "(e.g., positive: 60, negative: 30, neutral: 10). "
    "2. Top 3-5 key themes or topics mentioned (e.g., 'Course Content', 'Instructor', 'Assignments'). "
    "3. A brief example quote from the data for each theme. "
    "Respond *only* in the requested JSON format. Do not include any other text or markdown formatting."
)

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "sentiment": {
            "type": "OBJECT",
            "properties": {
                "positive": {"type": "NUMBER"},
                "negative": {"type": "NUMBER"},
                "neutral": {"type": "NUMBER"},
            },
        },
        "keyThemes": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "theme": {"type": "STRING"},
                    "mentions": {"type": "NUMBER"},
                    "exampleQuote": {"type": "STRING"},
                },
            },
        },
    },
}

MOCK_ANALYTICS = FeedbackAnalytics(
    sentiment=SentimentCounts(positive=65, negative=25, neutral=10),
    keyThemes=[
        KeyTheme(
            theme="Instructor Clarity",
            mentions=32,
            exampleQuote="The professor explained complex topics very well.",
        ),
        KeyTheme(
            theme="Assignment Load",
            mentions=18,
            exampleQuote="The weekly assignments were too heavy.",
        ),
        KeyTheme(
            theme="Course Pacing",
            mentions=12,
            exampleQuote="The course moved too fast in the last few weeks.",
        ),
    ],
)


class AnalyticsServiceError(RuntimeError):
    """Raised when analytics cannot be produced; ``status_code`` is the HTTP status to answer with."""

    def __init__(self, message: str, *, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def build_request_payload(csv_text: str) -> Dict[str, Any]:
    """Build the ``generateContent`` request body for the CSV data."""
    return {
        "contents": [{"parts": [{"text": f"Here is the CSV data:\n\n{csv_text}"}]}],
        "systemInstruction": {"parts": [{"text": SYSTEM_PROMPT}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


class AnalyticsClient:
    """Send CSV text to the LLM and return its raw response body.

    The body is passed through untouched, so callers receive the model's
    ``candidates`` envelope with the analytics JSON inside it. With the
    ``TEST_KEY`` credential a canned analytics document is returned instead
    and no request is made.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        api_url: str = GEMINI_API_URL,
        timeout: float = GEMINI_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = GEMINI_API_KEY if api_key is None else api_key
        self.api_url = api_url
        self.timeout = timeout

    @property
    def uses_mock(self) -> bool:
        return self.api_key == MOCK_API_KEY

    def analyze(self, csv_text: str) -> str:
        if not self.api_key:
            LOGGER.error("API key not found. Set the GEMINI_API_KEY environment variable.")
            raise AnalyticsServiceError("LLM API key is not configured.", status_code=500)

        if self.uses_mock:
            LOGGER.warning("Using MOCK analytics because the API key is '%s'", MOCK_API_KEY)
            return MOCK_ANALYTICS.model_dump_json()

        LOGGER.info("Calling LLM API at %s", self.api_url)
        try:
            response = requests.post(
                self.api_url,
                params={"key": self.api_key},
                json=build_request_payload(csv_text),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            LOGGER.error("Error calling LLM API: %s", exc)
            raise AnalyticsServiceError("Error communicating with LLM", status_code=502) from exc

        LOGGER.debug("LLM API full response: %s", response.text)
        return response.text
