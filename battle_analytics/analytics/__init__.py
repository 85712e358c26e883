"""Analytics layer package for dashboard aggregation boundaries."""

from .aggregation import (
	analytics_battles_by_category,
	analytics_bin_voting_trends,
	analytics_count_battles,
	analytics_pair_count,
	analytics_rank_popular_categories,
)
from .interfaces import AnalyticsPort, AnalyticsSnapshot, CategoryStats, VotingTrend
from .service import (
	AnalyticsAggregatorConfig,
	AnalyticsAggregatorService,
	analytics_build_degraded_snapshot,
	analytics_build_loading_snapshot,
)

__all__ = [
	"AnalyticsPort",
	"AnalyticsSnapshot",
	"CategoryStats",
	"VotingTrend",
	"AnalyticsAggregatorConfig",
	"AnalyticsAggregatorService",
	"analytics_build_degraded_snapshot",
	"analytics_build_loading_snapshot",
	"analytics_battles_by_category",
	"analytics_bin_voting_trends",
	"analytics_count_battles",
	"analytics_pair_count",
	"analytics_rank_popular_categories",
]
