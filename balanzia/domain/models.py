"""Typed domain models shared across runtime layers.

This module provides the canonical transaction record and the ingestion summary
contracts exchanged between the mapping, job, db and api layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


class TransactionStatus(str, Enum):
    """Review state of one canonical transaction."""

    PROCESSED = "Processed"
    REVIEW_REQUIRED = "Review Required"


def domain_derive_transaction_status(cost_center: str | None) -> TransactionStatus:
    """Derive transaction status from cost center assignment.

    Args:
        cost_center: Optional assigned cost center.

    Returns:
        TransactionStatus: `PROCESSED` when cost center is non-empty, else `REVIEW_REQUIRED`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if cost_center is not None and cost_center.strip():
        return TransactionStatus.PROCESSED
    return TransactionStatus.REVIEW_REQUIRED


@dataclass(frozen=True)
class CanonicalTransaction:
    """Canonical transaction record produced by the ingestion pipeline.

    Attributes:
        transaction_date: Calendar date without time component.
        merchant: Non-empty merchant display string.
        amount: Signed amount; positive is income/credit, negative is expense/debit.
        account: Account label.
        cost_center: Optional assigned cost center.
        status: Derived review status.
        identity_hash: Deterministic dedup fingerprint; empty until hashed.
    """

    transaction_date: date
    merchant: str
    amount: Decimal
    account: str
    cost_center: str | None = None
    status: TransactionStatus = TransactionStatus.REVIEW_REQUIRED
    identity_hash: str = ""


@dataclass(frozen=True)
class RowRejection:
    """One rejected upload row with its rejection reason.

    Attributes:
        row_index: One-based data row index (header excluded).
        reason: Rejection reason code (`MissingField`, `InvalidDate`, `InvalidAmount`).
        detail: Missing field name or offending raw value.
    """

    row_index: int
    reason: str
    detail: str

    def rejection_label(self) -> str:
        """Render the rejection as `Reason("detail")`."""

        return f'{self.reason}("{self.detail}")'


@dataclass(frozen=True)
class IngestionResult:
    """Summary of one completed ingestion.

    Attributes:
        total_parsed: Number of parsed data rows.
        new_count: Number of rows persisted as new transactions.
        duplicate_count: Number of rows already stored or repeated within the upload.
        rejected_rows: Rejected rows ordered by row index.
    """

    total_parsed: int
    new_count: int
    duplicate_count: int
    rejected_rows: tuple[RowRejection, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StoredTransaction:
    """Persisted transaction row returned by the transaction store.

    Attributes:
        transaction_id: Storage identifier.
        transaction: Canonical transaction values.
    """

    transaction_id: int
    transaction: CanonicalTransaction
