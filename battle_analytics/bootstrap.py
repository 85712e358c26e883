"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from battle_analytics.analytics import AnalyticsAggregatorConfig, AnalyticsAggregatorService
from battle_analytics.api import create_api_application
from battle_analytics.config import AppSettings, config_load_settings
from battle_analytics.db import (
    AnalyticsReadRepositoryPort,
    SQLAlchemyAnalyticsReadService,
    SQLAlchemyDatabaseHealthService,
    db_create_engine,
)


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    engine = db_create_engine(database_url=settings.database_url)
    db_health_service = SQLAlchemyDatabaseHealthService(engine=engine)
    analytics_service = bootstrap_build_analytics_service(
        settings=settings,
        repository=SQLAlchemyAnalyticsReadService(engine=engine),
    )
    return create_api_application(
        settings=settings,
        db_health_service=db_health_service,
        analytics_service=analytics_service,
    )


def bootstrap_create_analytics_service() -> AnalyticsAggregatorService:
    """Build the analytics aggregator for non-HTTP trigger surfaces.

    Returns:
        AnalyticsAggregatorService: Fully wired aggregator instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    engine = db_create_engine(database_url=settings.database_url)
    return bootstrap_build_analytics_service(
        settings=settings,
        repository=SQLAlchemyAnalyticsReadService(engine=engine),
    )


def bootstrap_build_analytics_service(
    settings: AppSettings,
    repository: AnalyticsReadRepositoryPort,
) -> AnalyticsAggregatorService:
    """Map runtime settings onto the aggregator configuration.

    Args:
        settings: Validated runtime settings.
        repository: DB-layer analytics read repository.

    Returns:
        AnalyticsAggregatorService: Configured aggregator.
    """

    return AnalyticsAggregatorService(
        repository=repository,
        config=AnalyticsAggregatorConfig(
            popular_category_limit=settings.analytics_popular_category_limit,
            trend_window_days=settings.analytics_trend_window_days,
            trend_bucket_limit=settings.analytics_trend_bucket_limit,
            trend_timezone=settings.analytics_trend_timezone,
        ),
    )
