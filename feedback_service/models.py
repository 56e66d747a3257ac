"""Pydantic models for the analysis service responses."""

from typing import List

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Human-readable failure reason")


class HealthResponse(BaseModel):
    status: str = Field(default="ok")


class SentimentCounts(BaseModel):
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class KeyTheme(BaseModel):
    theme: str
    mentions: int = 0
    exampleQuote: str = ""


class FeedbackAnalytics(BaseModel):
    """Analytics document returned by the analysis step.

    Attributes:
        sentiment: Share of positive, negative and neutral feedback.
        keyThemes: Recurring topics with a representative quote each.
    """

    sentiment: SentimentCounts
    keyThemes: List[KeyTheme] = Field(default_factory=list)
