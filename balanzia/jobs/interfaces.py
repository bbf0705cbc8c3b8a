"""Typed interfaces for job-layer orchestration responsibilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from balanzia.domain import IngestionResult


@dataclass(frozen=True)
class IngestionExecutionResult:
    """Result contract for one upload ingestion.

    Attributes:
        status: Final execution state (`success` or `failed`).
        result: Ingestion summary; None when the upload failed.
        error_code: Deterministic error code when failed.
        error_message: Human-readable error message when failed.
        retryable: Whether retrying the same upload later may succeed.
        timeline: Ordered stage events.
    """

    status: str
    result: IngestionResult | None = None
    error_code: str | None = None
    error_message: str | None = None
    retryable: bool = False
    timeline: list[dict[str, object]] = field(default_factory=list)

    def execution_succeeded(self) -> bool:
        """Return whether the ingestion completed and persisted its new set."""

        return self.status == "success"


class IngestionOrchestratorPort(Protocol):
    """Port definition for running one upload through the ingestion pipeline."""

    def job_ingest_upload(
        self,
        payload_bytes: bytes,
        mapping_template_name: str | None = None,
        file_kind: str = "delimited_text",
    ) -> IngestionExecutionResult:
        """Parse, map, normalize, hash, dedup and persist one upload.

        Args:
            payload_bytes: Raw uploaded file bytes.
            mapping_template_name: Optional stored template name; None uses the default alias table.
            file_kind: Declared file kind.

        Returns:
            IngestionExecutionResult: Final execution payload.

        Raises:
            IngestionRequestError: Raised when template name or file kind is invalid.
        """
