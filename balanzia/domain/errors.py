"""Project-native typed exceptions for ingestion failures."""

from __future__ import annotations

from .models import RowRejection


class BalanziaError(Exception):
    """Base exception for service-level failures.

    Attributes:
        error_code: Deterministic error code surfaced to callers.
        retryable: Whether retrying the same request later may succeed.
    """

    error_code = "BALANZIA_ERROR"
    retryable = False


class BatchUnparseableError(BalanziaError):
    """Uploaded payload cannot be decoded or parsed as delimited text."""

    error_code = "BATCH_UNPARSEABLE"


class StorageUnavailableError(BalanziaError, ConnectionError):
    """Storage collaborator failed to answer an existence query or bulk insert."""

    error_code = "STORAGE_UNAVAILABLE"
    retryable = True


class IngestionRequestError(BalanziaError, ValueError):
    """Caller supplied an unknown mapping template or unsupported file kind."""

    error_code = "INGESTION_REQUEST_INVALID"


class RowRejectedError(BalanziaError, ValueError):
    """Base for row-level failures that skip one row without aborting the upload.

    Attributes:
        reason: Rejection reason code.
        detail: Missing field name or offending raw value.
    """

    reason = "RowRejected"

    def __init__(self, detail: str):
        super().__init__(f'{self.reason}("{detail}")')
        self.detail = detail

    def to_rejection(self, row_index: int) -> RowRejection:
        """Convert the error into a row rejection record.

        Args:
            row_index: One-based data row index.

        Returns:
            RowRejection: Rejection record for the ingestion summary.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return RowRejection(row_index=row_index, reason=self.reason, detail=self.detail)


class MissingFieldError(RowRejectedError):
    """No populated source column supplies a required canonical field."""

    reason = "MissingField"


class InvalidDateError(RowRejectedError):
    """Date value matches none of the accepted formats."""

    reason = "InvalidDate"


class InvalidAmountError(RowRejectedError):
    """Amount value is not a finite decimal number."""

    reason = "InvalidAmount"
