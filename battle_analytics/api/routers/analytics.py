"""Analytics API router composition for dashboard snapshot reads."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from battle_analytics.analytics import (
    AnalyticsPort,
    AnalyticsSnapshot,
    CategoryStats,
    VotingTrend,
    analytics_build_degraded_snapshot,
)
from battle_analytics.config import AppSettings

logger = logging.getLogger(__name__)


def api_create_analytics_router(settings: AppSettings, analytics_service: AnalyticsPort) -> APIRouter:
    """Create analytics router exposing dashboard endpoints.

    Args:
        settings: Runtime settings used for the optional refresh timeout.
        analytics_service: Analytics-layer aggregation service.

    Returns:
        APIRouter: Router exposing `/analytics` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if analytics_service is None:
        raise ValueError("analytics_service must not be None")

    router = APIRouter(prefix="/analytics", tags=["analytics"])

    @router.get("/dashboard")
    async def api_analytics_dashboard() -> JSONResponse:
        """Recompute and return the dashboard snapshot.

        Returns:
            JSONResponse: Serialized snapshot. Data failures degrade sections instead of failing the request.
        """

        timeout_seconds = settings.analytics_refresh_timeout_seconds
        try:
            snapshot = await asyncio.wait_for(analytics_service.analytics_compute_snapshot(), timeout=timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("analytics dashboard computation exceeded %s seconds", timeout_seconds)
            snapshot = analytics_build_degraded_snapshot(None)

        return JSONResponse(content=api_serialize_analytics_snapshot(snapshot), status_code=status.HTTP_200_OK)

    @router.get("/battles/by-category")
    async def api_analytics_battles_by_category() -> JSONResponse:
        """Return potential battle counts for every category.

        Returns:
            JSONResponse: Per-category battle payload, or 503 when source reads fail.
        """

        try:
            battle_counts = await run_in_threadpool(analytics_service.analytics_battles_by_category)
        except RuntimeError as error:
            logger.exception("battle breakdown read failed")
            payload = {
                "status": "error",
                "code": "ANALYTICS_SOURCE_UNAVAILABLE",
                "message": str(error),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = {
            "items": [
                {"category_id": category_id, "total_battles": battle_count}
                for category_id, battle_count in battle_counts.items()
            ],
            "total_battles": sum(battle_counts.values()),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_analytics_snapshot(snapshot: AnalyticsSnapshot) -> dict[str, object]:
    """Serialize one analytics snapshot to JSON payload.

    Empty ranked or trend sections carry an explicit `no_data` state so clients
    can render a placeholder instead of an empty chart.

    Args:
        snapshot: Typed analytics snapshot.

    Returns:
        dict[str, object]: JSON-serializable snapshot payload.
    """

    return {
        "total_battles": snapshot.total_battles,
        "total_votes": snapshot.total_votes,
        "total_clips": snapshot.total_clips,
        "active_categories": snapshot.active_categories,
        "popular_categories": [api_serialize_category_stats(stats) for stats in snapshot.popular_categories],
        "popular_categories_state": "available" if snapshot.popular_categories else "no_data",
        "voting_trends": [api_serialize_voting_trend(trend) for trend in snapshot.voting_trends],
        "voting_trends_state": "available" if snapshot.voting_trends else "no_data",
        "loading": snapshot.loading,
        "computed_at_utc": None if snapshot.computed_at_utc is None else snapshot.computed_at_utc.isoformat(),
        "degraded_sections": list(snapshot.degraded_sections),
    }


def api_serialize_category_stats(stats: CategoryStats) -> dict[str, object]:
    """Serialize one ranked category entry."""

    return {
        "id": stats.category_id,
        "name": stats.name,
        "total_clips": stats.total_clips,
        "total_votes": stats.total_votes,
    }


def api_serialize_voting_trend(trend: VotingTrend) -> dict[str, object]:
    """Serialize one daily trend bucket."""

    return {"date": trend.date, "vote_count": trend.vote_count}


__all__ = [
    "api_create_analytics_router",
    "api_serialize_analytics_snapshot",
    "api_serialize_category_stats",
    "api_serialize_voting_trend",
]
