"""Database layer package for all SQL and persistence boundaries."""

from .engine import db_create_engine
from .health import SQLAlchemyDatabaseHealthService
from .interfaces import (
	DatabaseHealthPort,
	MappingTemplateRepositoryPort,
	TransactionInsertResult,
	TransactionListFilters,
	TransactionReviewRepositoryPort,
	TransactionStoreRepositoryPort,
)
from .mapping_template_store import SQLAlchemyMappingTemplateService
from .transaction_store import SQLAlchemyTransactionStoreService

__all__ = [
	"DatabaseHealthPort",
	"MappingTemplateRepositoryPort",
	"TransactionInsertResult",
	"TransactionListFilters",
	"TransactionReviewRepositoryPort",
	"TransactionStoreRepositoryPort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyMappingTemplateService",
	"SQLAlchemyTransactionStoreService",
	"db_create_engine",
]
