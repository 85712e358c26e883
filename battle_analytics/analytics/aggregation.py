"""Pure aggregation functions for dashboard analytics.

Every function here folds flat record sequences into new immutable values and
never touches the data store, so the whole module is testable with plain
record lists.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from battle_analytics.db import AudioClipRecord, CategoryRecord, VoteRecord

from .interfaces import CategoryStats, VotingTrend
from .trend_dates import analytics_resolve_trend_date


@dataclass(frozen=True)
class CategoryClipTally:
    """Clip count and display name for one category.

    Attributes:
        name: Category display name taken from the first clip seen.
        clip_count: Number of clips assigned to the category.
    """

    name: str
    clip_count: int


def analytics_pair_count(item_count: int) -> int:
    """Return the number of unordered pairs of distinct items.

    Args:
        item_count: Non-negative item count.

    Returns:
        int: `n*(n-1)/2` for `n > 1`, else 0.

    Raises:
        ValueError: Raised when item_count is negative.
    """

    if item_count < 0:
        raise ValueError("item_count must not be negative")
    if item_count < 2:
        return 0
    return item_count * (item_count - 1) // 2


def analytics_battles_by_category(
    categories: Sequence[CategoryRecord],
    clips: Iterable[AudioClipRecord],
) -> dict[str, int]:
    """Compute potential battle counts for every known category.

    Clips pointing at a category outside `categories` are ignored.

    Args:
        categories: All categories, expired ones included.
        clips: All audio clips.

    Returns:
        dict[str, int]: Category identifier to battle count, in category order.
    """

    clip_counts = Counter(clip.category_id for clip in clips if clip.category_id is not None)
    return {
        category.category_id: analytics_pair_count(clip_counts.get(category.category_id, 0))
        for category in categories
    }


def analytics_count_battles(
    categories: Sequence[CategoryRecord],
    clips: Iterable[AudioClipRecord],
) -> int:
    """Sum potential battles over all categories.

    Args:
        categories: All categories, expired ones included.
        clips: All audio clips.

    Returns:
        int: Total battle estimate.
    """

    return sum(analytics_battles_by_category(categories, clips).values())


def analytics_fold_category_clips(clips: Iterable[AudioClipRecord]) -> dict[str, CategoryClipTally]:
    """Fold clips into per-category clip tallies.

    Clips without a category identifier or a resolvable category name are skipped.

    Args:
        clips: Audio clips joined to their category names.

    Returns:
        dict[str, CategoryClipTally]: Category identifier to tally, in first-seen order.
    """

    resolvable_clips = [
        (clip.category_id, clip.category_name) for clip in clips if clip.category_id and clip.category_name
    ]
    clip_counts = Counter(category_id for category_id, _ in resolvable_clips)
    first_names = dict(reversed(resolvable_clips))
    return {
        category_id: CategoryClipTally(name=first_names[category_id], clip_count=clip_count)
        for category_id, clip_count in clip_counts.items()
    }


def analytics_build_clip_category_lookup(clips: Iterable[AudioClipRecord]) -> dict[str, str]:
    """Build the first join hop: clip identifier to category identifier.

    Args:
        clips: Audio clips.

    Returns:
        dict[str, str]: Lookup table for clips that reference a category.
    """

    return {clip.clip_id: clip.category_id for clip in clips if clip.category_id}


def analytics_fold_category_votes(
    votes: Iterable[VoteRecord],
    clip_category_lookup: dict[str, str],
) -> dict[str, int]:
    """Fold votes through the clip lookup into per-category vote counts.

    Votes whose clip is missing from the lookup are skipped.

    Args:
        votes: Vote rows.
        clip_category_lookup: Output of `analytics_build_clip_category_lookup`.

    Returns:
        dict[str, int]: Category identifier to vote count.
    """

    return dict(
        Counter(
            clip_category_lookup[vote.clip_id]
            for vote in votes
            if vote.clip_id is not None and vote.clip_id in clip_category_lookup
        )
    )


def analytics_rank_popular_categories(
    clips: Sequence[AudioClipRecord],
    votes: Iterable[VoteRecord],
    limit: int = 5,
) -> tuple[CategoryStats, ...]:
    """Rank categories by votes received on their clips.

    Only categories that own at least one resolvable clip can be ranked. Ties
    on vote count are broken by name, then category identifier, both ascending.

    Args:
        clips: Audio clips joined to their category names.
        votes: Vote rows.
        limit: Maximum number of ranked entries.

    Returns:
        tuple[CategoryStats, ...]: Ranked entries, most voted first.

    Raises:
        ValueError: Raised when limit is not positive.
    """

    if limit < 1:
        raise ValueError("limit must be positive")

    clip_tallies = analytics_fold_category_clips(clips)
    vote_counts = analytics_fold_category_votes(votes, analytics_build_clip_category_lookup(clips))
    merged_stats = [
        CategoryStats(
            category_id=category_id,
            name=tally.name,
            total_clips=tally.clip_count,
            total_votes=vote_counts.get(category_id, 0),
        )
        for category_id, tally in clip_tallies.items()
    ]
    ranked_stats = sorted(merged_stats, key=lambda stats: (-stats.total_votes, stats.name, stats.category_id))
    return tuple(ranked_stats[:limit])


def analytics_bin_voting_trends(
    created_at_values: Iterable[datetime],
    bucket_limit: int = 7,
    trend_timezone: str | None = None,
) -> tuple[VotingTrend, ...]:
    """Group ascending vote timestamps into daily buckets.

    Bucket order follows the first appearance of each date, which is
    chronological for ascending input. Only the last `bucket_limit` buckets are kept.

    Args:
        created_at_values: Offset-aware vote timestamps ordered ascending.
        bucket_limit: Maximum number of buckets returned.
        trend_timezone: Optional IANA zone for day boundaries; host local zone when None.

    Returns:
        tuple[VotingTrend, ...]: Daily vote counts; empty for empty input.

    Raises:
        ValueError: Raised when bucket_limit is not positive or a timestamp is offset-naive.
    """

    if bucket_limit < 1:
        raise ValueError("bucket_limit must be positive")

    date_counts = Counter(
        analytics_resolve_trend_date(created_at, trend_timezone) for created_at in created_at_values
    )
    trends = [VotingTrend(date=trend_date, vote_count=vote_count) for trend_date, vote_count in date_counts.items()]
    return tuple(trends[-bucket_limit:])


__all__ = [
    "CategoryClipTally",
    "analytics_pair_count",
    "analytics_battles_by_category",
    "analytics_count_battles",
    "analytics_fold_category_clips",
    "analytics_build_clip_category_lookup",
    "analytics_fold_category_votes",
    "analytics_rank_popular_categories",
    "analytics_bin_voting_trends",
]
