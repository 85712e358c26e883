"""Typed interfaces for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from battle_analytics.domain import HealthStatus


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


@dataclass(frozen=True)
class CategoryRecord:
    """Read model for one voting category row.

    Attributes:
        category_id: Category identifier.
        name: Category display name.
        expires_at_utc: Expiration timestamp; the category is active until this instant.
    """

    category_id: str
    name: str
    expires_at_utc: datetime


@dataclass(frozen=True)
class AudioClipRecord:
    """Read model for one audio clip row joined to its category name.

    Attributes:
        clip_id: Audio clip identifier.
        category_id: Owning category identifier, when set.
        category_name: Owning category name, or None when the category does not resolve.
    """

    clip_id: str
    category_id: str | None
    category_name: str | None


@dataclass(frozen=True)
class VoteRecord:
    """Read model for one vote row.

    Attributes:
        vote_id: Vote identifier.
        clip_id: Referenced audio clip identifier.
        created_at_utc: Vote creation timestamp.
    """

    vote_id: str
    clip_id: str | None
    created_at_utc: datetime


class AnalyticsReadRepositoryPort(Protocol):
    """Port definition for read-only analytics queries against the data store."""

    def db_vote_count(self) -> int:
        """Count all vote rows.

        Returns:
            int: Non-negative vote count.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_audio_clip_count(self) -> int:
        """Count all audio clip rows.

        Returns:
            int: Non-negative clip count.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_category_active_count(self, as_of_utc: datetime) -> int:
        """Count categories that expire strictly after the given instant.

        Args:
            as_of_utc: Offset-aware reference instant.

        Returns:
            int: Non-negative active category count.

        Raises:
            ValueError: Raised when the reference instant is offset-naive.
            RuntimeError: Raised when database read fails.
        """

    def db_category_list(self) -> list[CategoryRecord]:
        """List all categories, active and expired.

        Returns:
            list[CategoryRecord]: Category rows ordered by identifier.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_audio_clip_list(self) -> list[AudioClipRecord]:
        """List all clips with their category name resolved by join.

        Returns:
            list[AudioClipRecord]: Clip rows ordered by identifier.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_vote_list(self) -> list[VoteRecord]:
        """List all votes.

        Returns:
            list[VoteRecord]: Vote rows ordered by creation time.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_vote_created_at_list(self, window_start_utc: datetime, window_end_utc: datetime) -> list[datetime]:
        """List vote creation timestamps inside an inclusive window.

        Args:
            window_start_utc: Inclusive lower bound.
            window_end_utc: Inclusive upper bound.

        Returns:
            list[datetime]: Timestamps ordered ascending.

        Raises:
            ValueError: Raised when bounds are offset-naive or inverted.
            RuntimeError: Raised when database read fails.
        """
