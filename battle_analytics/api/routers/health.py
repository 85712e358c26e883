"""Health endpoint router composition for app and analytics data-store checks."""

from fastapi import APIRouter, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from battle_analytics.db import DatabaseHealthPort


def api_create_health_router(db_health_service: DatabaseHealthPort) -> APIRouter:
    """Create health-check router reporting analytics data-store reachability.

    Args:
        db_health_service: DB-layer health service interface.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def api_health_status() -> JSONResponse:
        """Return application and data-store health state.

        Returns:
            JSONResponse: 200 when the data store answers, 503 when analytics reads would degrade.
        """

        target = db_health_service.db_connection_label()
        try:
            db_health = await run_in_threadpool(db_health_service.db_check_health)
        except ConnectionError as error:
            return JSONResponse(
                content=api_build_health_payload(
                    overall_status="degraded",
                    database_status="down",
                    detail=str(error),
                    target=target,
                ),
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return JSONResponse(
            content=api_build_health_payload(
                overall_status="ok",
                database_status=db_health.status,
                detail=db_health.detail,
                target=target,
            ),
            status_code=status.HTTP_200_OK,
        )

    return router


def api_build_health_payload(overall_status: str, database_status: str, detail: str, target: str) -> dict[str, str]:
    """Build the deterministic health payload shape."""

    return {
        "status": overall_status,
        "app": "up",
        "database": database_status,
        "detail": detail,
        "target": target,
    }
