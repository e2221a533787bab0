"""Data models for the gurtle leaderboard."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

SCORE_MIN = -(2**31)
SCORE_MAX = 2**31 - 1


class Duration(str, Enum):
    """Time windows a leaderboard can be queried over."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALLTIME = "alltime"

    @classmethod
    def parse(cls, value: str) -> "Duration":
        """Parse a path value, treating anything unrecognised as all-time."""
        try:
            return cls(value)
        except ValueError:
            return cls.ALLTIME


class Entry(BaseModel):
    """A stored score record."""

    name: str
    score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    datetime: str = Field(..., description="Server-side UTC timestamp")

    model_config = ConfigDict(frozen=True)


class SubmittedEntry(BaseModel):
    """Model for score submission requests."""

    name: str
    score: int = Field(..., strict=True, ge=SCORE_MIN, le=SCORE_MAX)
    hash: str = Field(..., description="Client-computed integrity hash")


class Position(BaseModel):
    """Rank position of a score, 1-indexed."""

    position: int = Field(..., ge=1)


@dataclass(frozen=True)
class EntryFilter:
    """Store-agnostic filter over entries.

    ``since`` is an inclusive lower bound on the stored timestamp string and
    ``min_score`` an inclusive lower bound on the score. ``None`` disables
    the bound.
    """

    since: str | None = None
    min_score: int | None = None
