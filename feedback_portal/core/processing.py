from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping

from .errors import AnalyticsShapeError
from .models import (
    AnalyticsResult,
    ChartSlice,
    Number,
    Phase,
    RenderBranch,
    SentimentBreakdown,
    Theme,
    ThemeItem,
    UploadState,
)

SENTIMENT_COLORS: Dict[str, str] = {
    "Positive": "#10B981",
    "Negative": "#EF4444",
    "Neutral": "#F59E0B",
}

# Chart order is fixed regardless of the order keys arrive in.
SENTIMENT_FIELDS = (
    ("Positive", "positive"),
    ("Negative", "negative"),
    ("Neutral", "neutral"),
)


def _is_finite(value: Number) -> bool:
    # json.loads yields inf for 1e400 and nan for NaN; ints are always finite.
    return isinstance(value, int) or math.isfinite(value)


def _count(section: Mapping[str, Any], key: str) -> Number:
    value = section.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AnalyticsShapeError(f"sentiment.{key} must be a number, got {type(value).__name__}")
    if not _is_finite(value):
        raise AnalyticsShapeError(f"sentiment.{key} must be a finite number")
    if value < 0:
        raise AnalyticsShapeError(f"sentiment.{key} must not be negative")
    return value


def _theme(entry: Any, index: int) -> Theme:
    if not isinstance(entry, dict):
        raise AnalyticsShapeError(f"keyThemes[{index}] must be an object")

    mentions = entry.get("mentions")
    if mentions is None or isinstance(mentions, bool) or not isinstance(mentions, (int, float)):
        mentions = 0
    elif not _is_finite(mentions):
        mentions = 0
    label = entry.get("theme")
    quote = entry.get("exampleQuote")
    return Theme(
        theme="" if label is None else str(label),
        mentions=max(int(mentions), 0),
        example_quote="" if quote is None else str(quote),
    )


def coerce_analytics(raw: Any) -> AnalyticsResult:
    """Check the decoded payload's shape and build an ``AnalyticsResult``.

    Raises:
        AnalyticsShapeError: When ``sentiment`` or ``keyThemes`` is missing or mistyped.
    """
    if not isinstance(raw, dict):
        raise AnalyticsShapeError("analytics payload must be a JSON object")

    sentiment = raw.get("sentiment")
    if not isinstance(sentiment, dict):
        raise AnalyticsShapeError("analytics payload is missing the sentiment section")

    themes = raw.get("keyThemes")
    if not isinstance(themes, list):
        raise AnalyticsShapeError("analytics payload is missing the keyThemes section")

    return AnalyticsResult(
        sentiment=SentimentBreakdown(
            positive=_count(sentiment, "positive"),
            negative=_count(sentiment, "negative"),
            neutral=_count(sentiment, "neutral"),
        ),
        key_themes=[_theme(entry, index) for index, entry in enumerate(themes)],
    )


def to_chart_series(result: AnalyticsResult) -> List[ChartSlice]:
    """Three pie slices in Positive, Negative, Neutral order."""
    return [
        ChartSlice(label=label, value=getattr(result.sentiment, attr), color=SENTIMENT_COLORS[label])
        for label, attr in SENTIMENT_FIELDS
    ]


def sentiment_percentages(series: List[ChartSlice]) -> Dict[str, float]:
    """Share of the total for each slice, in percent."""
    total = sum(item.value for item in series)
    return {item.label: (item.value / total * 100) if total else 0.0 for item in series}


def format_slice_label(label: str, percent: float) -> str:
    return f"{label} {percent:.0f}%"


def to_theme_list(result: AnalyticsResult) -> List[ThemeItem]:
    return [ThemeItem(key=index, theme=theme) for index, theme in enumerate(result.key_themes)]


def select_render_branch(state: UploadState) -> RenderBranch:
    """Pick the results panel view for the current state."""
    if state.phase is Phase.SUBMITTING:
        return RenderBranch.LOADING
    if state.analytics is None:
        return RenderBranch.EMPTY
    try:
        coerce_analytics(state.analytics)
    except AnalyticsShapeError:
        return RenderBranch.UNEXPECTED_FORMAT
    return RenderBranch.RESULT
