"""Job-layer ingestion orchestrator with deterministic stage timeline."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from balanzia.config import DEFAULT_INGESTION_DATE_FORMATS
from balanzia.db import MappingTemplateRepositoryPort, TransactionStoreRepositoryPort
from balanzia.domain import (
    BatchUnparseableError,
    CanonicalTransaction,
    IngestionRequestError,
    IngestionResult,
    IngestionStage,
    RowRejectedError,
    RowRejection,
    StorageUnavailableError,
    domain_build_stage_event,
)
from balanzia.mapping import (
    DELIMITED_TEXT_FILE_KIND,
    SUPPORTED_FILE_KINDS,
    ColumnMappingService,
    MappedRow,
    MappingTemplate,
    NormalizerConfig,
    TransactionNormalizer,
    mapping_attach_identity_hash,
)

from .dedup_filter import job_dedup_partition
from .interfaces import IngestionExecutionResult, IngestionOrchestratorPort
from .raw_extraction import job_raw_extract_delimited_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionOrchestratorConfig:
    """Configuration values for ingestion orchestration execution.

    Attributes:
        default_account_label: Account applied when a row carries none.
        date_formats: Ordered accepted transaction date formats.
    """

    default_account_label: str = "Default"
    date_formats: tuple[str, ...] = DEFAULT_INGESTION_DATE_FORMATS


class TransactionIngestionOrchestrator(IngestionOrchestratorPort):
    """Concrete orchestrator running one upload through parse, map, normalize, hash, filter and persist."""

    def __init__(
        self,
        transaction_repository: TransactionStoreRepositoryPort,
        config: IngestionOrchestratorConfig | None = None,
        mapping_template_repository: MappingTemplateRepositoryPort | None = None,
        mapping_service: ColumnMappingService | None = None,
    ):
        """Initialize ingestion orchestrator dependencies.

        Args:
            transaction_repository: Storage collaborator for existence checks and bulk inserts.
            config: Optional ingestion configuration.
            mapping_template_repository: Optional stored template lookup; without it only
                the default alias table is available.
            mapping_service: Optional column mapping service override.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if transaction_repository is None:
            raise ValueError("transaction_repository must not be None")

        resolved_config = config or IngestionOrchestratorConfig()
        self._transaction_repository = transaction_repository
        self._mapping_template_repository = mapping_template_repository
        self._mapping_service = mapping_service or ColumnMappingService()
        self._normalizer = TransactionNormalizer(
            NormalizerConfig(
                default_account_label=resolved_config.default_account_label,
                date_formats=resolved_config.date_formats,
            )
        )

    def job_ingest_upload(
        self,
        payload_bytes: bytes,
        mapping_template_name: str | None = None,
        file_kind: str = DELIMITED_TEXT_FILE_KIND,
    ) -> IngestionExecutionResult:
        """Parse, map, normalize, hash, dedup and persist one upload.

        Row-level problems are collected per row. Only an unparseable payload or a
        storage failure fails the whole upload; a failed upload writes nothing.

        Args:
            payload_bytes: Raw uploaded file bytes.
            mapping_template_name: Optional stored template name; None uses the default alias table.
            file_kind: Declared file kind.

        Returns:
            IngestionExecutionResult: Summary on success; error code and retry hint on failure.

        Raises:
            IngestionRequestError: Raised when template name or file kind is invalid.
        """

        normalized_file_kind = (file_kind or "").strip()
        if normalized_file_kind not in SUPPORTED_FILE_KINDS:
            raise IngestionRequestError(f"unsupported file_kind={file_kind}")

        timeline: list[dict[str, object]] = []
        current_stage = IngestionStage.PARSING
        try:
            self._job_stage_started(timeline, current_stage)
            template = self._job_resolve_template(mapping_template_name, normalized_file_kind)
            extraction_result = job_raw_extract_delimited_rows(payload_bytes)
            self._job_stage_completed(
                timeline,
                current_stage,
                {
                    "row_count": len(extraction_result.rows),
                    "column_count": len(extraction_result.header),
                    "delimiter": extraction_result.delimiter,
                    "template": template.name,
                },
            )

            rejections: list[RowRejection] = []

            current_stage = IngestionStage.MAPPING
            self._job_stage_started(timeline, current_stage)
            mapped_rows: list[MappedRow] = []
            for raw_row in extraction_result.rows:
                try:
                    mapped_rows.append(self._mapping_service.mapping_map_row(raw_row, template))
                except RowRejectedError as error:
                    rejections.append(self._job_reject_row(error, raw_row.row_index))
            self._job_stage_completed(timeline, current_stage, {"mapped_count": len(mapped_rows)})

            current_stage = IngestionStage.NORMALIZING
            self._job_stage_started(timeline, current_stage)
            normalized_transactions: list[CanonicalTransaction] = []
            for mapped_row in mapped_rows:
                try:
                    normalized_transactions.append(self._normalizer.mapping_normalize_row(mapped_row))
                except RowRejectedError as error:
                    rejections.append(self._job_reject_row(error, mapped_row.row_index))
            self._job_stage_completed(
                timeline,
                current_stage,
                {"normalized_count": len(normalized_transactions), "rejected_count": len(rejections)},
            )

            current_stage = IngestionStage.HASHING
            self._job_stage_started(timeline, current_stage)
            hashed_transactions = [mapping_attach_identity_hash(transaction) for transaction in normalized_transactions]
            self._job_stage_completed(
                timeline,
                current_stage,
                {"distinct_identity_count": len({transaction.identity_hash for transaction in hashed_transactions})},
            )

            current_stage = IngestionStage.FILTERING
            self._job_stage_started(timeline, current_stage)
            partition = job_dedup_partition(hashed_transactions, self._transaction_repository)
            self._job_stage_completed(
                timeline,
                current_stage,
                {
                    "new_count": len(partition.new_transactions),
                    "duplicate_count": len(partition.duplicate_transactions),
                    "stored_hash_count": partition.stored_hash_count,
                },
            )

            current_stage = IngestionStage.PERSISTING
            self._job_stage_started(timeline, current_stage)
            inserted_count = 0
            conflict_count = 0
            if partition.new_transactions:
                insert_result = self._transaction_repository.db_transaction_insert_many(partition.new_transactions)
                inserted_count = insert_result.inserted_count
                conflict_count = insert_result.conflict_count
                if conflict_count:
                    logger.warning(
                        "identity conflicts during bulk insert; rows were stored concurrently conflict_count=%s",
                        conflict_count,
                    )
            self._job_stage_completed(
                timeline,
                current_stage,
                {"inserted_count": inserted_count, "conflict_count": conflict_count},
            )
        except (BatchUnparseableError, StorageUnavailableError) as error:
            return self._job_build_failure(timeline, current_stage, error)

        result = IngestionResult(
            total_parsed=len(extraction_result.rows),
            new_count=inserted_count,
            duplicate_count=len(partition.duplicate_transactions) + conflict_count,
            rejected_rows=tuple(sorted(rejections, key=lambda rejection: rejection.row_index)),
        )
        timeline.append(
            domain_build_stage_event(
                stage=IngestionStage.DONE,
                status="success",
                details={
                    "total_parsed": result.total_parsed,
                    "new_count": result.new_count,
                    "duplicate_count": result.duplicate_count,
                    "rejected_count": len(result.rejected_rows),
                },
            )
        )
        logger.info(
            "ingestion completed total_parsed=%s new_count=%s duplicate_count=%s rejected_count=%s",
            result.total_parsed,
            result.new_count,
            result.duplicate_count,
            len(result.rejected_rows),
        )
        return IngestionExecutionResult(status="success", result=result, timeline=timeline)

    def _job_resolve_template(self, mapping_template_name: str | None, file_kind: str) -> MappingTemplate:
        """Resolve the requested mapping template or the default alias table.

        Args:
            mapping_template_name: Optional stored template name.
            file_kind: Validated file kind.

        Returns:
            MappingTemplate: Template applied to every row of the upload.

        Raises:
            IngestionRequestError: Raised when the template is unknown or targets another file kind.
            StorageUnavailableError: Raised when template lookup fails.
        """

        normalized_name = (mapping_template_name or "").strip()
        if not normalized_name:
            return self._mapping_service.mapping_default_template()

        if self._mapping_template_repository is None:
            raise IngestionRequestError(f"mapping template lookup is not configured; cannot use template={normalized_name}")

        try:
            template = self._mapping_template_repository.db_mapping_template_get_by_name(normalized_name)
        except ValueError as error:
            raise IngestionRequestError(f"mapping template={normalized_name} is misconfigured: {error}") from error
        if template is None:
            raise IngestionRequestError(f"unknown mapping template={normalized_name}")
        if template.file_kind != file_kind:
            raise IngestionRequestError(
                f"mapping template={normalized_name} targets file_kind={template.file_kind}, not {file_kind}"
            )
        return template

    def _job_reject_row(self, error: RowRejectedError, row_index: int) -> RowRejection:
        """Convert a row-level error into a rejection record and log it."""

        rejection = error.to_rejection(row_index)
        logger.debug("row rejected row_index=%s reason=%s", row_index, rejection.rejection_label())
        return rejection

    def _job_stage_started(self, timeline: list[dict[str, object]], stage: IngestionStage) -> None:
        timeline.append(domain_build_stage_event(stage=stage, status="started"))
        logger.debug("ingestion stage started stage=%s", stage.value)

    def _job_stage_completed(
        self,
        timeline: list[dict[str, object]],
        stage: IngestionStage,
        details: dict[str, object],
    ) -> None:
        timeline.append(domain_build_stage_event(stage=stage, status="completed", details=details))
        logger.info("ingestion stage completed stage=%s details=%s", stage.value, details)

    def _job_build_failure(
        self,
        timeline: list[dict[str, object]],
        stage: IngestionStage,
        error: BatchUnparseableError | StorageUnavailableError,
    ) -> IngestionExecutionResult:
        """Finalize a fatal upload failure with deterministic error payload.

        Args:
            timeline: Mutable stage timeline events.
            stage: Stage that was running when the error surfaced.
            error: Fatal ingestion error.

        Returns:
            IngestionExecutionResult: Failed execution result without summary.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        timeline.append(
            domain_build_stage_event(
                stage=stage,
                status="failed",
                details={"error_type": type(error).__name__, "error_message": str(error)},
            )
        )
        timeline.append(
            domain_build_stage_event(
                stage=IngestionStage.FAILED,
                status="failed",
                details={"error_code": error.error_code, "retryable": error.retryable},
            )
        )
        logger.error(
            "ingestion failed stage=%s error_code=%s retryable=%s error=%s",
            stage.value,
            error.error_code,
            error.retryable,
            error,
        )
        return IngestionExecutionResult(
            status="failed",
            result=None,
            error_code=error.error_code,
            error_message=str(error),
            retryable=error.retryable,
            timeline=timeline,
        )
