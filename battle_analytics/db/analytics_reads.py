"""Database service for read-only analytics source queries."""
# pylint: disable=duplicate-code

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from battle_analytics.db.interfaces import (
    AnalyticsReadRepositoryPort,
    AudioClipRecord,
    CategoryRecord,
    VoteRecord,
)


class SQLAlchemyAnalyticsReadService(AnalyticsReadRepositoryPort):
    """SQLAlchemy implementation of analytics source reads over fixed SQL templates."""

    _VOTE_COUNT_QUERY = "SELECT COUNT(*) AS row_count FROM votes"
    _AUDIO_CLIP_COUNT_QUERY = "SELECT COUNT(*) AS row_count FROM audio_clips"
    _CATEGORY_ACTIVE_COUNT_QUERY = "SELECT COUNT(*) AS row_count FROM categories WHERE expires_at > :as_of_utc"

    _CATEGORY_LIST_QUERY = "SELECT id, name, expires_at FROM categories ORDER BY id asc"

    _AUDIO_CLIP_LIST_QUERY = (
        "SELECT audio_clips.id AS clip_id, audio_clips.category_id AS category_id, categories.name AS category_name "
        "FROM audio_clips "
        "LEFT JOIN categories ON categories.id = audio_clips.category_id "
        "ORDER BY audio_clips.id asc"
    )

    _VOTE_LIST_QUERY = "SELECT id, clip_id, created_at FROM votes ORDER BY created_at asc, id asc"

    _VOTE_CREATED_AT_WINDOW_QUERY = (
        "SELECT created_at FROM votes "
        "WHERE created_at >= :window_start_utc AND created_at <= :window_end_utc "
        "ORDER BY created_at asc, id asc"
    )

    def __init__(self, engine: Engine):
        """Initialize analytics read service.

        Args:
            engine: SQLAlchemy engine used for reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_vote_count(self) -> int:
        """Count all vote rows.

        Returns:
            int: Non-negative vote count.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        return self._db_analytics_scalar_count(self._VOTE_COUNT_QUERY, {}, "vote count")

    def db_audio_clip_count(self) -> int:
        """Count all audio clip rows.

        Returns:
            int: Non-negative clip count.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        return self._db_analytics_scalar_count(self._AUDIO_CLIP_COUNT_QUERY, {}, "audio clip count")

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

        self._db_analytics_validate_aware(as_of_utc, "as_of_utc")
        return self._db_analytics_scalar_count(
            self._CATEGORY_ACTIVE_COUNT_QUERY,
            {"as_of_utc": as_of_utc},
            "active category count",
        )

    def db_category_list(self) -> list[CategoryRecord]:
        """List all categories, active and expired.

        Returns:
            list[CategoryRecord]: Category rows ordered by identifier.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        rows = self._db_analytics_fetch_rows(self._CATEGORY_LIST_QUERY, {}, "category list")
        return [
            CategoryRecord(
                category_id=str(row["id"]),
                name=row["name"],
                expires_at_utc=row["expires_at"],
            )
            for row in rows
        ]

    def db_audio_clip_list(self) -> list[AudioClipRecord]:
        """List all clips with their category name resolved by left join.

        Returns:
            list[AudioClipRecord]: Clip rows ordered by identifier.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        rows = self._db_analytics_fetch_rows(self._AUDIO_CLIP_LIST_QUERY, {}, "audio clip list")
        return [
            AudioClipRecord(
                clip_id=str(row["clip_id"]),
                category_id=None if row["category_id"] is None else str(row["category_id"]),
                category_name=row["category_name"],
            )
            for row in rows
        ]

    def db_vote_list(self) -> list[VoteRecord]:
        """List all votes in creation order.

        Returns:
            list[VoteRecord]: Vote rows ordered by creation time.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        rows = self._db_analytics_fetch_rows(self._VOTE_LIST_QUERY, {}, "vote list")
        return [
            VoteRecord(
                vote_id=str(row["id"]),
                clip_id=None if row["clip_id"] is None else str(row["clip_id"]),
                created_at_utc=row["created_at"],
            )
            for row in rows
        ]

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

        self._db_analytics_validate_aware(window_start_utc, "window_start_utc")
        self._db_analytics_validate_aware(window_end_utc, "window_end_utc")
        if window_start_utc > window_end_utc:
            raise ValueError("window_start_utc must not be after window_end_utc")

        rows = self._db_analytics_fetch_rows(
            self._VOTE_CREATED_AT_WINDOW_QUERY,
            {"window_start_utc": window_start_utc, "window_end_utc": window_end_utc},
            "vote trend window",
        )
        return [row["created_at"] for row in rows]

    def _db_analytics_scalar_count(self, query: str, parameters: dict[str, Any], label: str) -> int:
        rows = self._db_analytics_fetch_rows(query, parameters, label)
        if not rows:
            return 0
        row_count = rows[0]["row_count"]
        return 0 if row_count is None else int(row_count)

    def _db_analytics_fetch_rows(self, query: str, parameters: dict[str, Any], label: str) -> list[Any]:
        try:
            with self._engine.connect() as connection:
                return list(connection.execute(text(query), parameters).mappings().all())
        except SQLAlchemyError as error:
            raise RuntimeError(f"{label} read failed") from error

    @staticmethod
    def _db_analytics_validate_aware(value: datetime, field_name: str) -> None:
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(f"{field_name} must be offset-aware")
