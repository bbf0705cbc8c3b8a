"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from balanzia.api import create_api_application
from balanzia.config import AppSettings, config_configure_logging, config_load_settings
from balanzia.db import (
    SQLAlchemyDatabaseHealthService,
    SQLAlchemyMappingTemplateService,
    SQLAlchemyTransactionStoreService,
    db_create_engine,
)
from balanzia.jobs import IngestionOrchestratorConfig, TransactionIngestionOrchestrator


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(level=resolved_settings.log_level)
    engine = db_create_engine(database_url=resolved_settings.database_url)
    transaction_repository = SQLAlchemyTransactionStoreService(engine=engine)
    ingestion_orchestrator = _bootstrap_build_orchestrator(resolved_settings, engine, transaction_repository)
    return create_api_application(
        settings=resolved_settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        ingestion_orchestrator=ingestion_orchestrator,
        transaction_repository=transaction_repository,
    )


def bootstrap_create_ingestion_orchestrator(settings: AppSettings | None = None) -> TransactionIngestionOrchestrator:
    """Build ingestion orchestrator for non-HTTP trigger surfaces.

    Returns:
        TransactionIngestionOrchestrator: Fully wired ingestion orchestrator instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_configure_logging(level=resolved_settings.log_level)
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return _bootstrap_build_orchestrator(
        resolved_settings,
        engine,
        SQLAlchemyTransactionStoreService(engine=engine),
    )


def _bootstrap_build_orchestrator(settings, engine, transaction_repository) -> TransactionIngestionOrchestrator:
    return TransactionIngestionOrchestrator(
        transaction_repository=transaction_repository,
        config=IngestionOrchestratorConfig(
            default_account_label=settings.default_account_label,
            date_formats=settings.ingestion_date_formats,
        ),
        mapping_template_repository=SQLAlchemyMappingTemplateService(engine=engine),
    )
