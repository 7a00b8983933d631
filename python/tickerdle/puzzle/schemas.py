"""Pydantic schemas for the daily puzzle."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import ErrorCode

Arrow = Literal["none", "up", "down"]
GameStatus = Literal["active", "solved", "exhausted"]


class Entity(BaseModel):
    """A guessable company."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ticker: str = Field(..., min_length=1, description="Ticker symbol (upper case)")
    name: str = Field(..., min_length=1, description="Display name")
    sector: str = Field(default="", description="Sector")
    hq: str = Field(default="", description="Headquarters")
    founded: Optional[float] = Field(default=None, description="Founding year")
    price: Optional[float] = Field(default=None, description="Last close price")
    market_cap: Optional[float] = Field(
        default=None, alias="marketCap", description="Market capitalization"
    )
    employees: Optional[float] = Field(default=None, description="Employee count")
    pe: Optional[float] = Field(default=None, description="Price/earnings ratio")


class BucketBound(BaseModel):
    """One bucket: a label and its exclusive upper bound."""

    label: str = Field(..., description="Bucket label")
    upper: float = Field(..., description="Exclusive upper bound")


class BucketDefinition(BaseModel):
    """Ordered buckets with strictly increasing upper bounds."""

    bounds: list[BucketBound] = Field(..., description="Ordered buckets")

    @model_validator(mode="after")
    def _check_bounds(self) -> "BucketDefinition":
        if not self.bounds:
            raise ValueError("bucket definition needs at least one bucket")
        for previous, current in zip(self.bounds, self.bounds[1:]):
            if not current.upper > previous.upper:
                raise ValueError(
                    f"bucket bounds must be strictly increasing "
                    f"({previous.label}={previous.upper}, {current.label}={current.upper})"
                )
        if any(math.isnan(bound.upper) for bound in self.bounds):
            raise ValueError("bucket bounds must not be NaN")
        return self

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, float]]) -> "BucketDefinition":
        return cls(bounds=[BucketBound(label=label, upper=upper) for label, upper in pairs])


class Bucket(BaseModel):
    """Bucket a value falls into; index -1 means unknown."""

    label: str
    index: int


class NumericComparison(BaseModel):
    match: bool
    arrow: Arrow = "none"


class AttributeFeedback(BaseModel):
    """Verdict for one compared attribute of a guess."""

    attribute: str = Field(..., description="Attribute name")
    kind: Literal["exact", "numeric"] = Field(..., description="Comparison kind")
    value: str | float | None = Field(default=None, description="Guessed value")
    bucket: Optional[str] = Field(
        default=None, description="Bucket label of the guessed value"
    )
    match: bool = Field(..., description="Whether the attribute matched")
    arrow: Arrow = Field(
        default="none", description="Direction towards the answer when not matched"
    )


class GuessFeedback(BaseModel):
    """Feedback for one guess, in tile order."""

    ticker: str = Field(..., description="Guessed ticker")
    name: str = Field(..., description="Guessed company name")
    correct: bool = Field(..., description="Whether the guess is the answer")
    attributes: list[AttributeFeedback] = Field(
        default_factory=list, description="Per-attribute verdicts"
    )


class SessionRecord(BaseModel):
    """Persisted state of one player's daily session."""

    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Puzzle day")
    guesses: list[str] = Field(default_factory=list, description="Guessed tickers")
    solved: bool = Field(default=False, description="Whether the answer was found")


class GuessResult(BaseModel):
    """Outcome of a guess submission."""

    accepted: bool = Field(..., description="Whether the guess was recorded")
    error: Optional[ErrorCode] = Field(default=None, description="Rejection code")
    message: Optional[str] = Field(default=None, description="Human-readable message")
    feedback: Optional[GuessFeedback] = Field(
        default=None, description="Feedback for the accepted guess"
    )
    status: GameStatus = Field(..., description="Session status after the call")
    guesses_used: int = Field(..., description="Guesses recorded so far")
    max_guesses: int = Field(..., description="Guess budget")


class GameState(BaseModel):
    """Snapshot of today's session for rendering."""

    date: str = Field(..., description="Puzzle day")
    status: GameStatus = Field(..., description="Session status")
    max_guesses: int = Field(..., description="Guess budget")
    guesses: list[GuessFeedback] = Field(
        default_factory=list, description="Guesses with feedback, oldest first"
    )
    answer: Optional[Entity] = Field(
        default=None, description="Answer, revealed once the session is finished"
    )
    notice: Optional[ErrorCode] = Field(
        default=None, description="Recovered problem to surface to the player"
    )


class DataAsOf(BaseModel):
    """Metadata written by the offline market-data refresh job."""

    model_config = ConfigDict(populate_by_name=True)

    as_of_date: str = Field(..., alias="asOfDate", description="Trading day of prices")
    updated_at_utc: datetime = Field(
        ..., alias="updatedAtUTC", description="Refresh timestamp"
    )
    updated_companies: int = Field(
        default=0, alias="updatedCompanies", description="Companies refreshed"
    )
    missing_companies: int = Field(
        default=0, alias="missingCompanies", description="Companies without data"
    )
