"""Domain models used across application layer boundaries."""

from .errors import (
	BalanziaError,
	BatchUnparseableError,
	IngestionRequestError,
	InvalidAmountError,
	InvalidDateError,
	MissingFieldError,
	RowRejectedError,
	StorageUnavailableError,
)
from .models import (
	CanonicalTransaction,
	HealthStatus,
	IngestionResult,
	RowRejection,
	StoredTransaction,
	TransactionStatus,
	domain_derive_transaction_status,
)
from .timeline import IngestionStage, domain_build_stage_event
from .value_parsing import (
	domain_canonical_amount_text,
	domain_normalize_optional_text,
	domain_parse_amount,
	domain_parse_transaction_date,
)

__all__ = [
	"BalanziaError",
	"BatchUnparseableError",
	"IngestionRequestError",
	"InvalidAmountError",
	"InvalidDateError",
	"MissingFieldError",
	"RowRejectedError",
	"StorageUnavailableError",
	"CanonicalTransaction",
	"HealthStatus",
	"IngestionResult",
	"RowRejection",
	"StoredTransaction",
	"TransactionStatus",
	"domain_derive_transaction_status",
	"IngestionStage",
	"domain_build_stage_event",
	"domain_canonical_amount_text",
	"domain_normalize_optional_text",
	"domain_parse_amount",
	"domain_parse_transaction_date",
]
