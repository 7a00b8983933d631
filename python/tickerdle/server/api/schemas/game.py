"""API schemas for daily puzzle endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

import tickerdle.puzzle.schemas as puzzle_schemas


class GuessRequest(BaseModel):
    """Request payload for submitting a guess."""

    input: str = Field(default="", description="Company name or ticker")


class SuggestionItem(BaseModel):
    """Autocomplete entry."""

    ticker: str = Field(..., description="Ticker symbol")
    name: str = Field(..., description="Company name")


class SuggestionListData(BaseModel):
    """Response payload for autocomplete."""

    query: str = Field(..., description="Query as typed")
    suggestions: list[SuggestionItem] = Field(
        default_factory=list, description="Suggestions"
    )


class ShareData(BaseModel):
    """Response payload for the share text."""

    date: str = Field(..., description="Puzzle day")
    text: str = Field(..., description="Shareable result text")


class DataAsOfData(BaseModel):
    """Response payload for data freshness metadata."""

    data_asof: Optional[puzzle_schemas.DataAsOf] = Field(
        default=None, description="Refresh metadata, if available"
    )
    company_count: int = Field(..., description="Companies in play")
