from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union

Number = Union[int, float]


class Phase(str, Enum):
    """Discrete workflow state of one submission attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ValidationResult(str, Enum):
    OK = "ok"
    MISSING_FILE = "missing_file"
    INVALID_CAPTCHA = "invalid_captcha"


class RenderBranch(str, Enum):
    """Which view the results panel shows."""

    LOADING = "loading"
    EMPTY = "empty"
    RESULT = "result"
    UNEXPECTED_FORMAT = "unexpected_format"


@dataclass(frozen=True)
class SelectedFile:
    """A file picked in the form, held in memory until it is uploaded."""

    name: str
    content: bytes
    mime_type: str = "text/csv"

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_upload(cls, file_obj: Any) -> "SelectedFile":
        """Build from a Streamlit ``UploadedFile`` or any named binary stream."""
        filename = getattr(file_obj, "name", None) or "feedback.csv"
        filetype = getattr(file_obj, "type", None) or "text/csv"
        file_bytes = file_obj.getvalue() if hasattr(file_obj, "getvalue") else file_obj.read()
        if hasattr(file_obj, "seek"):
            file_obj.seek(0)
        return cls(name=str(filename), content=bytes(file_bytes), mime_type=str(filetype))


@dataclass(frozen=True)
class UploadState:
    """Form and workflow state for one mounted upload form.

    ``analytics`` holds the canonical decoded payload and is present only
    while ``phase`` is ``SUCCEEDED``. Its shape is checked by the presenter,
    not here.
    """

    selected_file: Optional[SelectedFile] = None
    file_label: str = ""
    captcha_input: str = ""
    phase: Phase = Phase.IDLE
    status_message: Optional[str] = None
    analytics: Optional[Any] = None

    def __post_init__(self) -> None:
        has_analytics = self.analytics is not None
        if has_analytics != (self.phase is Phase.SUCCEEDED):
            raise ValueError(
                f"analytics must be present exactly when phase is succeeded (phase={self.phase.value})"
            )

    @property
    def is_submitting(self) -> bool:
        return self.phase is Phase.SUBMITTING


@dataclass(frozen=True)
class SentimentBreakdown:
    positive: Number = 0
    negative: Number = 0
    neutral: Number = 0

    @property
    def total(self) -> Number:
        return self.positive + self.negative + self.neutral


@dataclass(frozen=True)
class Theme:
    """One recurring theme reported by the analysis service."""

    theme: str
    mentions: int = 0
    example_quote: str = ""


@dataclass(frozen=True)
class AnalyticsResult:
    sentiment: SentimentBreakdown
    key_themes: List[Theme] = field(default_factory=list)


@dataclass(frozen=True)
class ChartSlice:
    label: str
    value: Number
    color: str


@dataclass(frozen=True)
class ThemeItem:
    """A theme paired with its position, used as a stable render key."""

    key: int
    theme: Theme


@dataclass(frozen=True)
class DecodedPayload:
    """Outcome of decoding a success body.

    ``kind`` is ``"wrapped"`` when the analytics came out of a generative-model
    envelope and ``"direct"`` when the body was the analytics document itself.
    """

    kind: str
    analytics: Any
