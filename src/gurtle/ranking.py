"""Ranking rules: time windows, top-N ordering and rank positions."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from .models import Duration, Entry, EntryFilter, Position

TOP_N = 10

WINDOWS: dict[Duration, timedelta] = {
    Duration.WEEKLY: timedelta(weeks=1),
    Duration.MONTHLY: timedelta(weeks=4),
}


def format_timestamp(moment: datetime) -> str:
    """Render a datetime in the stored format.

    Fixed width UTC with microseconds, so string order is chronological order.
    """
    return moment.astimezone(UTC).isoformat(timespec="microseconds")


def window_start(duration: Duration, now: datetime) -> str | None:
    """Return the earliest timestamp inside the window, or None for all-time."""
    window = WINDOWS.get(duration)
    if window is None:
        return None
    return format_timestamp(now - window)


def scores_filter(duration: Duration, now: datetime) -> EntryFilter:
    return EntryFilter(since=window_start(duration, now))


def position_filter(duration: Duration, score: int, now: datetime) -> EntryFilter:
    return EntryFilter(since=window_start(duration, now), min_score=score)


def top_entries(entries: Iterable[Entry], limit: int = TOP_N) -> list[Entry]:
    """Best entries first (lowest score), at most ``limit`` of them."""
    return sorted(entries, key=lambda entry: entry.score)[:limit]


def position_from_count(count: int) -> Position:
    """Turn the number of entries ranked ahead into a 1-indexed position."""
    return Position(position=count + 1)
