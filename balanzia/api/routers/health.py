"""Health endpoint router reporting service and transaction store status."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from balanzia.db import DatabaseHealthPort


def api_create_health_router(db_health_service: DatabaseHealthPort) -> APIRouter:
    """Create health-check router probing the transaction store.

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
    def api_health_status() -> JSONResponse:
        """Return service and transaction store health; 503 while the store is unreachable."""

        target = db_health_service.db_connection_label()
        try:
            db_health = db_health_service.db_check_health()
        except ConnectionError as error:
            return JSONResponse(
                content={"status": "degraded", "store": "down", "detail": str(error), "target": target},
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return JSONResponse(
            content={"status": "ok", "store": db_health.status, "detail": db_health.detail, "target": target},
            status_code=status.HTTP_200_OK,
        )

    return router
