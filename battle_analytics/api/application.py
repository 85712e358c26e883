"""FastAPI application factory for the analytics service."""

from fastapi import FastAPI

from battle_analytics.analytics import AnalyticsPort
from battle_analytics.config import AppSettings
from battle_analytics.db import DatabaseHealthPort
from battle_analytics.domain import AppMetadata

from .routers import api_create_analytics_router, api_create_health_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    analytics_service: AnalyticsPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        analytics_service: Aggregation service backing dashboard endpoints.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """

    metadata = AppMetadata(application_name="battle-analytics", environment_name=settings.environment_name)
    application = FastAPI(title="Clip Battle Analytics")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service identification response.

        Returns:
            dict[str, str]: Service name, readiness, and environment label.
        """

        return {
            "service": metadata.application_name,
            "status": "ready",
            "environment": metadata.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(
        api_create_analytics_router(
            settings=settings,
            analytics_service=analytics_service,
        )
    )

    return application
