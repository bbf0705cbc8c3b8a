"""Job layer package for upload ingestion orchestration boundaries."""

from .dedup_filter import DedupPartition, job_dedup_partition
from .ingestion_orchestrator import IngestionOrchestratorConfig, TransactionIngestionOrchestrator
from .interfaces import IngestionExecutionResult, IngestionOrchestratorPort
from .raw_extraction import RawPayloadExtractionResult, job_raw_extract_delimited_rows

__all__ = [
	"DedupPartition",
	"job_dedup_partition",
	"IngestionOrchestratorConfig",
	"TransactionIngestionOrchestrator",
	"IngestionExecutionResult",
	"IngestionOrchestratorPort",
	"RawPayloadExtractionResult",
	"job_raw_extract_delimited_rows",
]
