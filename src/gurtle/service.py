"""Business logic service for leaderboard operations."""

from datetime import UTC, datetime

from .database import LeaderboardDatabase
from .models import Duration, Entry, Position, SubmittedEntry
from .ranking import (
    format_timestamp,
    position_filter,
    position_from_count,
    scores_filter,
    top_entries,
)
from .validator import InvalidHashError, ScoreValidator, SharedSecretValidator


class LeaderboardService:
    """Service layer containing pure business logic for leaderboard operations."""

    def __init__(
        self,
        database: LeaderboardDatabase | None = None,
        validator: ScoreValidator | None = None,
    ) -> None:
        """Initialize service with database and validator dependencies."""
        self.db = database or LeaderboardDatabase()
        self.validator = validator or SharedSecretValidator()

    def health_check(self) -> dict[str, str]:
        """Perform health check."""
        return {"status": "healthy", "service": "leaderboard"}

    def get_scores(self, duration: Duration) -> list[Entry]:
        """Get the best entries within a time window.

        Args:
            duration: Window to rank over

        Returns:
            At most ten entries, lowest score first

        Raises:
            StoreError: If the store query fails
        """
        entries = self.db.find_entries(scores_filter(duration, datetime.now(UTC)))
        return top_entries(entries)

    def get_position(self, duration: Duration, score: int) -> Position:
        """Get the rank a score would take within a time window.

        Raises:
            StoreError: If the store count fails
        """
        count = self.db.count_entries(
            position_filter(duration, score, datetime.now(UTC))
        )
        return position_from_count(count)

    def submit_score(self, submitted: SubmittedEntry) -> Entry:
        """Validate and store a score submission.

        Args:
            submitted: Parsed submission including its integrity hash

        Returns:
            The stored entry with its server-side timestamp

        Raises:
            InvalidHashError: If the hash does not match
            StoreError: If the insert fails
        """
        if not self.validator.is_valid(submitted):
            raise InvalidHashError("Invalid hash")

        entry = Entry(
            name=submitted.name,
            score=submitted.score,
            datetime=format_timestamp(datetime.now(UTC)),
        )
        self.db.insert_entry(entry)
        return entry
