"""Regression tests for pure dashboard aggregation functions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from battle_analytics.analytics.aggregation import (
    analytics_battles_by_category,
    analytics_bin_voting_trends,
    analytics_build_clip_category_lookup,
    analytics_count_battles,
    analytics_fold_category_clips,
    analytics_fold_category_votes,
    analytics_pair_count,
    analytics_rank_popular_categories,
)
from battle_analytics.analytics.interfaces import CategoryStats, VotingTrend
from battle_analytics.analytics.trend_dates import analytics_resolve_trend_date
from battle_analytics.db.interfaces import AudioClipRecord, CategoryRecord, VoteRecord

_EXPIRES_AT = datetime(2026, 12, 1, tzinfo=timezone.utc)
_VOTED_AT = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _category(category_id: str, name: str | None = None) -> CategoryRecord:
    return CategoryRecord(category_id=category_id, name=name or category_id, expires_at_utc=_EXPIRES_AT)


def _clip(clip_id: str, category_id: str | None, category_name: str | None = "") -> AudioClipRecord:
    resolved_name = category_id if category_name == "" else category_name
    return AudioClipRecord(clip_id=clip_id, category_id=category_id, category_name=resolved_name)


def _vote(vote_id: str, clip_id: str | None) -> VoteRecord:
    return VoteRecord(vote_id=vote_id, clip_id=clip_id, created_at_utc=_VOTED_AT)


@pytest.mark.parametrize(
    ("item_count", "expected_pairs"),
    [(0, 0), (1, 0), (2, 1), (3, 3), (4, 6), (10, 45)],
)
def test_analytics_pair_count_matches_combinations(item_count: int, expected_pairs: int) -> None:
    """Count unordered distinct pairs as n*(n-1)/2 with zero below two items."""

    assert analytics_pair_count(item_count) == expected_pairs


def test_analytics_pair_count_rejects_negative_counts() -> None:
    """Reject negative item counts instead of returning a negative estimate."""

    with pytest.raises(ValueError):
        analytics_pair_count(-1)


def test_analytics_battles_sum_over_all_categories_including_empty_ones() -> None:
    """Sum per-category pairs and report zero for categories with fewer than two clips.

    Returns:
        None: Assertions validate per-category and total battle counts.

    Raises:
        AssertionError: Raised when battle estimates deviate from combinations.
    """

    categories = [_category("cat-a"), _category("cat-b"), _category("cat-c"), _category("cat-d")]
    clips = [
        _clip("clip-1", "cat-a"),
        _clip("clip-2", "cat-a"),
        _clip("clip-3", "cat-a"),
        _clip("clip-4", "cat-b"),
        _clip("clip-5", "cat-c"),
        _clip("clip-6", "cat-c"),
        _clip("clip-7", "cat-missing"),
        _clip("clip-8", "cat-missing"),
        _clip("clip-9", None),
    ]

    assert analytics_battles_by_category(categories, clips) == {"cat-a": 3, "cat-b": 0, "cat-c": 1, "cat-d": 0}
    assert analytics_count_battles(categories, clips) == 4


def test_analytics_battles_are_zero_when_every_category_has_at_most_one_clip() -> None:
    """Return zero battles when no category holds a pair of clips."""

    categories = [_category("cat-a"), _category("cat-b")]
    clips = [_clip("clip-1", "cat-a"), _clip("clip-2", "cat-b")]

    assert analytics_count_battles(categories, clips) == 0
    assert analytics_count_battles([], []) == 0


def test_analytics_fold_category_clips_skips_unresolvable_clips_and_keeps_first_name() -> None:
    """Skip clips without category id or name and keep the first-seen category name."""

    clips = [
        _clip("clip-1", "cat-a", "Beatbox"),
        _clip("clip-2", None, "Orphan"),
        _clip("clip-3", "cat-b", None),
        _clip("clip-4", "cat-a", "Beatbox Renamed"),
    ]

    tallies = analytics_fold_category_clips(clips)

    assert list(tallies) == ["cat-a"]
    assert tallies["cat-a"].name == "Beatbox"
    assert tallies["cat-a"].clip_count == 2


def test_analytics_fold_category_votes_joins_through_clip_lookup() -> None:
    """Resolve votes through the clip lookup and silently drop unresolvable votes."""

    clips = [_clip("clip-1", "cat-a"), _clip("clip-2", "cat-b"), _clip("clip-3", None)]
    votes = [
        _vote("vote-1", "clip-1"),
        _vote("vote-2", "clip-1"),
        _vote("vote-3", "clip-2"),
        _vote("vote-4", "clip-3"),
        _vote("vote-5", "clip-deleted"),
        _vote("vote-6", None),
    ]

    lookup = analytics_build_clip_category_lookup(clips)

    assert lookup == {"clip-1": "cat-a", "clip-2": "cat-b"}
    assert analytics_fold_category_votes(votes, lookup) == {"cat-a": 2, "cat-b": 1}


def test_analytics_rank_popular_categories_orders_by_votes_then_name() -> None:
    """Rank by vote count descending with a deterministic name tie-break.

    Returns:
        None: Assertions validate ordering, zero-vote inclusion, and truncation.

    Raises:
        AssertionError: Raised when ranking order or totals deviate.
    """

    clips = [
        _clip("clip-1", "cat-a", "Zydeco"),
        _clip("clip-2", "cat-b", "Acapella"),
        _clip("clip-3", "cat-c", "Beatbox"),
        _clip("clip-4", "cat-d", "Chiptune"),
        _clip("clip-5", "cat-e", "Drill"),
        _clip("clip-6", "cat-f", "Emo"),
        _clip("clip-7", "cat-f", "Emo"),
    ]
    votes = [
        _vote("vote-1", "clip-1"),
        _vote("vote-2", "clip-1"),
        _vote("vote-3", "clip-2"),
        _vote("vote-4", "clip-2"),
        _vote("vote-5", "clip-3"),
        _vote("vote-6", "clip-6"),
        _vote("vote-7", "clip-7"),
        _vote("vote-8", "clip-7"),
    ]

    ranked = analytics_rank_popular_categories(clips, votes)

    assert ranked == (
        CategoryStats(category_id="cat-f", name="Emo", total_clips=2, total_votes=3),
        CategoryStats(category_id="cat-b", name="Acapella", total_clips=1, total_votes=2),
        CategoryStats(category_id="cat-a", name="Zydeco", total_clips=1, total_votes=2),
        CategoryStats(category_id="cat-c", name="Beatbox", total_clips=1, total_votes=1),
        CategoryStats(category_id="cat-d", name="Chiptune", total_clips=1, total_votes=0),
    )


def test_analytics_rank_popular_categories_respects_limit_and_rejects_invalid_limit() -> None:
    """Truncate to the requested limit and reject non-positive limits."""

    clips = [_clip(f"clip-{index}", f"cat-{index}") for index in range(8)]

    assert len(analytics_rank_popular_categories(clips, [], limit=3)) == 3
    assert len(analytics_rank_popular_categories(clips, [])) == 5
    with pytest.raises(ValueError):
        analytics_rank_popular_categories(clips, [], limit=0)


def test_analytics_rank_popular_categories_drops_votes_for_unnamed_categories() -> None:
    """Exclude votes whose clip points at a category without a resolvable name."""

    clips = [_clip("clip-1", "cat-a"), _clip("clip-2", "cat-deleted", None)]
    votes = [_vote("vote-1", "clip-1"), _vote("vote-2", "clip-2"), _vote("vote-3", "clip-2")]

    ranked = analytics_rank_popular_categories(clips, votes)

    assert ranked == (CategoryStats(category_id="cat-a", name="cat-a", total_clips=1, total_votes=1),)


def test_analytics_bin_voting_trends_counts_per_day_in_first_appearance_order() -> None:
    """Group ascending timestamps into chronological daily buckets."""

    created_at_values = [
        datetime(2026, 10, 15, 8, 0, tzinfo=timezone.utc),
        datetime(2026, 10, 15, 23, 59, tzinfo=timezone.utc),
        datetime(2026, 10, 16, 0, 0, tzinfo=timezone.utc),
        datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc),
    ]

    trends = analytics_bin_voting_trends(created_at_values, trend_timezone="UTC")

    assert trends == (
        VotingTrend(date="2026-10-15", vote_count=2),
        VotingTrend(date="2026-10-16", vote_count=1),
        VotingTrend(date="2026-10-18", vote_count=1),
    )


def test_analytics_bin_voting_trends_keeps_last_seven_buckets() -> None:
    """Keep only the most recent buckets when more distinct days are present.

    Returns:
        None: Assertions validate truncation and chronological order.

    Raises:
        AssertionError: Raised when truncation keeps the wrong days.
    """

    start = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
    created_at_values = [start + timedelta(days=offset) for offset in range(10)]

    trends = analytics_bin_voting_trends(created_at_values, bucket_limit=7, trend_timezone="UTC")

    assert [trend.date for trend in trends] == [
        "2026-10-04",
        "2026-10-05",
        "2026-10-06",
        "2026-10-07",
        "2026-10-08",
        "2026-10-09",
        "2026-10-10",
    ]
    assert all(trend.vote_count == 1 for trend in trends)


def test_analytics_bin_voting_trends_returns_empty_for_empty_input() -> None:
    """Return an empty tuple so callers can render a no-data state."""

    assert analytics_bin_voting_trends([], trend_timezone="UTC") == ()


def test_analytics_bin_voting_trends_uses_configured_zone_for_day_boundaries() -> None:
    """Bucket by the configured zone rather than UTC when one is provided."""

    created_at_values = [
        datetime(2026, 10, 17, 22, 30, tzinfo=timezone.utc),
        datetime(2026, 10, 18, 1, 0, tzinfo=timezone.utc),
    ]

    utc_trends = analytics_bin_voting_trends(created_at_values, trend_timezone="UTC")
    tokyo_trends = analytics_bin_voting_trends(created_at_values, trend_timezone="Asia/Tokyo")

    assert [trend.date for trend in utc_trends] == ["2026-10-17", "2026-10-18"]
    assert tokyo_trends == (VotingTrend(date="2026-10-18", vote_count=2),)


def test_analytics_resolve_trend_date_rejects_offset_naive_timestamps() -> None:
    """Reject offset-naive timestamps instead of guessing their zone."""

    with pytest.raises(ValueError):
        analytics_resolve_trend_date(datetime(2026, 10, 18, 12, 0))


def test_analytics_resolve_trend_date_defaults_to_host_local_zone() -> None:
    """Fall back to the host local zone when no zone is configured."""

    created_at = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

    assert analytics_resolve_trend_date(created_at) == created_at.astimezone().date().isoformat()


def test_analytics_aggregation_is_idempotent_for_unchanged_input() -> None:
    """Produce identical results when recomputed from the same records."""

    categories = [_category("cat-a"), _category("cat-b")]
    clips = [_clip("clip-1", "cat-a"), _clip("clip-2", "cat-a"), _clip("clip-3", "cat-b")]
    votes = [_vote("vote-1", "clip-1"), _vote("vote-2", "clip-3"), _vote("vote-3", "clip-3")]

    first_pass = (analytics_count_battles(categories, clips), analytics_rank_popular_categories(clips, votes))
    second_pass = (analytics_count_battles(categories, clips), analytics_rank_popular_categories(clips, votes))

    assert first_pass == second_pass
