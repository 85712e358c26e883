"""Typed interfaces for analytics-layer aggregations."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class CategoryStats:
    """Popularity summary for one category.

    Attributes:
        category_id: Category identifier.
        name: Category display name.
        total_clips: Number of clips assigned to the category.
        total_votes: Number of votes cast on clips in the category.
    """

    category_id: str
    name: str
    total_clips: int
    total_votes: int


@dataclass(frozen=True)
class VotingTrend:
    """Vote count for one calendar day.

    Attributes:
        date: Calendar date in YYYY-MM-DD format.
        vote_count: Number of votes created on that date.
    """

    date: str
    vote_count: int


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Derived dashboard state produced by one aggregation pass.

    Attributes:
        total_battles: Estimated number of head-to-head clip pairings.
        total_votes: Number of votes.
        total_clips: Number of audio clips.
        active_categories: Number of categories that have not expired.
        popular_categories: Ranked category summaries, most voted first.
        voting_trends: Daily vote counts in chronological order.
        loading: True only for the placeholder state before the first computation.
        computed_at_utc: Reference instant used by the computation.
        degraded_sections: Names of computations that fell back to defaults.
    """

    total_battles: int
    total_votes: int
    total_clips: int
    active_categories: int
    popular_categories: tuple[CategoryStats, ...]
    voting_trends: tuple[VotingTrend, ...]
    loading: bool
    computed_at_utc: datetime | None
    degraded_sections: tuple[str, ...]


class AnalyticsPort(Protocol):
    """Port definition for dashboard analytics aggregation services."""

    async def analytics_compute_snapshot(self, as_of_utc: datetime | None = None) -> AnalyticsSnapshot:
        """Compute one fresh dashboard snapshot.

        Args:
            as_of_utc: Optional offset-aware reference instant; current time when omitted.

        Returns:
            AnalyticsSnapshot: Derived dashboard state. Never raises for data failures.
        """

    def analytics_battles_by_category(self) -> dict[str, int]:
        """Compute potential battle counts per category.

        Returns:
            dict[str, int]: Category identifier to battle count.

        Raises:
            RuntimeError: Raised when source reads fail.
        """
