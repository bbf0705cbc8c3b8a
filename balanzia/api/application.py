"""FastAPI application factory for the statement ingestion service."""

from fastapi import FastAPI

from balanzia.config import AppSettings
from balanzia.db import DatabaseHealthPort, TransactionReviewRepositoryPort
from balanzia.jobs import IngestionOrchestratorPort

from .routers import api_create_health_router, api_create_ingestion_router, api_create_transactions_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    ingestion_orchestrator: IngestionOrchestratorPort,
    transaction_repository: TransactionReviewRepositoryPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        db_health_service: Database health service used by health endpoints.
        ingestion_orchestrator: Orchestrator executing uploads.
        transaction_repository: Repository backing transaction review APIs.

    Returns:
        FastAPI: Application with health, upload and transaction routes.
    """
    application = FastAPI(title="Balanzia")

    @application.get("/", tags=["service"])
    def api_service_index() -> dict[str, str]:
        return {
            "service": "balanzia",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(
        api_create_ingestion_router(settings=settings, ingestion_orchestrator=ingestion_orchestrator)
    )
    application.include_router(
        api_create_transactions_router(settings=settings, transaction_repository=transaction_repository)
    )

    return application
