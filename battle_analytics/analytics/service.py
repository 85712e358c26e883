"""Dashboard analytics aggregation service.

The service issues the independent source reads concurrently, folds each
result set with the pure functions in `aggregation`, and assembles one
immutable snapshot. A failing read or computation degrades only its own
section to the default value.
"""
# pylint: disable=too-few-public-methods

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeVar

from battle_analytics.db import AnalyticsReadRepositoryPort

from .aggregation import (
    analytics_battles_by_category,
    analytics_bin_voting_trends,
    analytics_count_battles,
    analytics_rank_popular_categories,
)
from .interfaces import AnalyticsSnapshot, CategoryStats, VotingTrend
from .trend_dates import analytics_resolve_trend_window

logger = logging.getLogger(__name__)

_SectionValue = TypeVar("_SectionValue")

ANALYTICS_SECTION_NAMES = (
    "total_votes",
    "total_clips",
    "active_categories",
    "total_battles",
    "popular_categories",
    "voting_trends",
)


@dataclass(frozen=True)
class AnalyticsAggregatorConfig:
    """Tunable limits for one aggregation pass.

    Attributes:
        popular_category_limit: Maximum number of ranked categories.
        trend_window_days: Trailing window length for voting trends.
        trend_bucket_limit: Maximum number of daily trend buckets.
        trend_timezone: Optional IANA zone for day boundaries; host local zone when None.
    """

    popular_category_limit: int = 5
    trend_window_days: int = 7
    trend_bucket_limit: int = 7
    trend_timezone: str | None = None


def analytics_build_loading_snapshot() -> AnalyticsSnapshot:
    """Build the placeholder snapshot shown before the first computation completes.

    Returns:
        AnalyticsSnapshot: Zeroed snapshot with `loading=True`.
    """

    return AnalyticsSnapshot(
        total_battles=0,
        total_votes=0,
        total_clips=0,
        active_categories=0,
        popular_categories=(),
        voting_trends=(),
        loading=True,
        computed_at_utc=None,
        degraded_sections=(),
    )


def analytics_build_degraded_snapshot(as_of_utc: datetime | None) -> AnalyticsSnapshot:
    """Build the fallback snapshot used when a whole aggregation pass fails.

    Args:
        as_of_utc: Reference instant of the failed pass, when known.

    Returns:
        AnalyticsSnapshot: Zeroed, completed snapshot with every section marked degraded.
    """

    return AnalyticsSnapshot(
        total_battles=0,
        total_votes=0,
        total_clips=0,
        active_categories=0,
        popular_categories=(),
        voting_trends=(),
        loading=False,
        computed_at_utc=as_of_utc,
        degraded_sections=ANALYTICS_SECTION_NAMES,
    )


class AnalyticsAggregatorService:
    """Compute dashboard analytics snapshots from analytics source reads."""

    def __init__(self, repository: AnalyticsReadRepositoryPort, config: AnalyticsAggregatorConfig | None = None):
        """Initialize aggregator dependencies.

        Args:
            repository: DB-layer analytics read repository.
            config: Optional aggregation limits; defaults apply when omitted.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when repository or limits are invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        resolved_config = config or AnalyticsAggregatorConfig()
        if resolved_config.popular_category_limit < 1:
            raise ValueError("popular_category_limit must be positive")
        if resolved_config.trend_window_days < 1:
            raise ValueError("trend_window_days must be positive")
        if resolved_config.trend_bucket_limit < 1:
            raise ValueError("trend_bucket_limit must be positive")
        self._repository = repository
        self._config = resolved_config

    async def analytics_compute_snapshot(self, as_of_utc: datetime | None = None) -> AnalyticsSnapshot:
        """Compute one fresh dashboard snapshot.

        All source reads run concurrently in worker threads and are awaited
        jointly. The call always completes with `loading=False`.

        Args:
            as_of_utc: Optional offset-aware reference instant; current time when omitted.

        Returns:
            AnalyticsSnapshot: Derived dashboard state.
        """

        resolved_as_of_utc = as_of_utc or datetime.now(timezone.utc)
        try:
            section_results = await asyncio.gather(
                self._analytics_run_guarded("total_votes", self._repository.db_vote_count, 0),
                self._analytics_run_guarded("total_clips", self._repository.db_audio_clip_count, 0),
                self._analytics_run_guarded(
                    "active_categories",
                    lambda: self._repository.db_category_active_count(as_of_utc=resolved_as_of_utc),
                    0,
                ),
                self._analytics_run_guarded("total_battles", self._analytics_compute_total_battles, 0),
                self._analytics_run_guarded("popular_categories", self._analytics_compute_popular_categories, ()),
                self._analytics_run_guarded(
                    "voting_trends",
                    lambda: self._analytics_compute_voting_trends(resolved_as_of_utc),
                    (),
                ),
            )
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("analytics snapshot computation failed")
            return analytics_build_degraded_snapshot(resolved_as_of_utc)

        values = [value for value, _ in section_results]
        degraded_sections = tuple(section for _, section in section_results if section is not None)
        total_votes, total_clips, active_categories, total_battles, popular_categories, voting_trends = values

        snapshot = AnalyticsSnapshot(
            total_battles=total_battles,
            total_votes=total_votes,
            total_clips=total_clips,
            active_categories=active_categories,
            popular_categories=popular_categories,
            voting_trends=voting_trends,
            loading=False,
            computed_at_utc=resolved_as_of_utc,
            degraded_sections=degraded_sections,
        )
        logger.info(
            "analytics snapshot computed: votes=%s clips=%s active_categories=%s battles=%s "
            "ranked_categories=%s trend_buckets=%s degraded=%s",
            snapshot.total_votes,
            snapshot.total_clips,
            snapshot.active_categories,
            snapshot.total_battles,
            len(snapshot.popular_categories),
            len(snapshot.voting_trends),
            ",".join(degraded_sections) or "none",
        )
        return snapshot

    def analytics_battles_by_category(self) -> dict[str, int]:
        """Compute potential battle counts per category.

        Returns:
            dict[str, int]: Category identifier to battle count.

        Raises:
            RuntimeError: Raised when source reads fail.
        """

        return analytics_battles_by_category(
            self._repository.db_category_list(),
            self._repository.db_audio_clip_list(),
        )

    def _analytics_compute_total_battles(self) -> int:
        return analytics_count_battles(
            self._repository.db_category_list(),
            self._repository.db_audio_clip_list(),
        )

    def _analytics_compute_popular_categories(self) -> tuple[CategoryStats, ...]:
        return analytics_rank_popular_categories(
            self._repository.db_audio_clip_list(),
            self._repository.db_vote_list(),
            limit=self._config.popular_category_limit,
        )

    def _analytics_compute_voting_trends(self, as_of_utc: datetime) -> tuple[VotingTrend, ...]:
        window_start_utc, window_end_utc = analytics_resolve_trend_window(as_of_utc, self._config.trend_window_days)
        return analytics_bin_voting_trends(
            self._repository.db_vote_created_at_list(
                window_start_utc=window_start_utc,
                window_end_utc=window_end_utc,
            ),
            bucket_limit=self._config.trend_bucket_limit,
            trend_timezone=self._config.trend_timezone,
        )

    @staticmethod
    async def _analytics_run_guarded(
        section: str,
        computation: Callable[[], _SectionValue],
        default: _SectionValue,
    ) -> tuple[_SectionValue, str | None]:
        """Run one blocking computation in a worker thread, defaulting on failure.

        Args:
            section: Snapshot section name used in diagnostics.
            computation: Blocking read-and-fold callable.
            default: Value returned when the computation fails.

        Returns:
            tuple: Computed or default value, and the section name when degraded.
        """

        try:
            return await asyncio.to_thread(computation), None
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("analytics section %s failed; using default", section)
            return default, section


__all__ = [
    "ANALYTICS_SECTION_NAMES",
    "AnalyticsAggregatorConfig",
    "AnalyticsAggregatorService",
    "analytics_build_degraded_snapshot",
    "analytics_build_loading_snapshot",
]
