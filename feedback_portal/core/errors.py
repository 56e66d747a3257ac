"""Errors surfaced by the upload workflow.

None of these are fatal: the workflow hands them back next to the new
``UploadState`` and the page shows ``error.message`` to the user.
"""

from __future__ import annotations

from typing import Optional

MISSING_FILE_MESSAGE = "Please select a file to upload."
INVALID_CAPTCHA_MESSAGE = "Invalid CAPTCHA code."
MALFORMED_RESPONSE_MESSAGE = "Failed to parse analytics response."


class UploadError(Exception):
    """Base class for failures of a single submission attempt."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingFileError(UploadError):
    """Raised when the form is submitted without a selected file."""

    def __init__(self) -> None:
        super().__init__(MISSING_FILE_MESSAGE)


class InvalidCaptchaError(UploadError):
    """Raised when the CAPTCHA answer does not match the challenge."""

    def __init__(self) -> None:
        super().__init__(INVALID_CAPTCHA_MESSAGE)


class TransportError(UploadError):
    """Raised when the analysis service is unreachable or answers with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class MalformedResponseError(UploadError):
    """Raised when a success body cannot be decoded into analytics.

    ``raw_payload`` is kept for diagnostic logging only and is never shown to the user.
    """

    def __init__(self, raw_payload: str, *, reason: Optional[str] = None) -> None:
        super().__init__(MALFORMED_RESPONSE_MESSAGE)
        self.raw_payload = raw_payload
        self.reason = reason


class AnalyticsShapeError(ValueError):
    """Raised when parsed analytics lack the ``sentiment`` or ``keyThemes`` sections."""
