"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol, Sequence

from balanzia.domain import CanonicalTransaction, HealthStatus, StoredTransaction, TransactionStatus
from balanzia.mapping import MappingTemplate


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


@dataclass(frozen=True)
class TransactionInsertResult:
    """Outcome of one bulk transaction insert.

    Attributes:
        inserted_hashes: Identity hashes written by this insert.
        conflict_hashes: Identity hashes skipped because a row with the same identity already existed.
    """

    inserted_hashes: frozenset[str]
    conflict_hashes: frozenset[str]

    @property
    def inserted_count(self) -> int:
        return len(self.inserted_hashes)

    @property
    def conflict_count(self) -> int:
        return len(self.conflict_hashes)


@dataclass(frozen=True)
class TransactionListFilters:
    """Optional filters for transaction listing.

    Attributes:
        start_date: Inclusive lower date bound.
        end_date: Inclusive upper date bound.
        merchant: Case-insensitive merchant substring.
        account: Exact account label.
        cost_center: Exact cost center.
        status: Exact review status.
    """

    start_date: date | None = None
    end_date: date | None = None
    merchant: str | None = None
    account: str | None = None
    cost_center: str | None = None
    status: TransactionStatus | None = None


class TransactionStoreRepositoryPort(Protocol):
    """Port definition for the ingestion storage collaborator."""

    def db_transaction_existing_hashes(self, identity_hashes: set[str]) -> set[str]:
        """Return the subset of identity hashes already stored, in one query.

        Args:
            identity_hashes: Candidate identity hashes.

        Returns:
            set[str]: Stored identity hashes.

        Raises:
            StorageUnavailableError: Raised when the existence query fails.
        """

    def db_transaction_insert_many(self, transactions: Sequence[CanonicalTransaction]) -> TransactionInsertResult:
        """Insert transactions as one bulk statement.

        Args:
            transactions: Hashed canonical transactions.

        Returns:
            TransactionInsertResult: Inserted and conflicting identity hashes.

        Raises:
            StorageUnavailableError: Raised when the insert fails; nothing is written.
        """


class TransactionReviewRepositoryPort(Protocol):
    """Port definition for post-ingestion transaction reads and cost center assignment."""

    def db_transaction_list(
        self,
        filters: TransactionListFilters,
        limit: int,
        offset: int,
    ) -> list[StoredTransaction]:
        """List stored transactions ordered by date descending.

        Args:
            filters: Optional list filters.
            limit: Max rows to return.
            offset: Rows to skip.

        Returns:
            list[StoredTransaction]: Matching transactions.

        Raises:
            RuntimeError: Raised when read operation fails.
        """

    def db_transaction_assign_cost_center(
        self,
        transaction_id: int,
        cost_center: str | None,
    ) -> StoredTransaction | None:
        """Assign or clear a cost center and re-derive status in the same write.

        Args:
            transaction_id: Stored transaction identifier.
            cost_center: New cost center; None or blank clears it.

        Returns:
            StoredTransaction | None: Updated transaction, or None when absent.

        Raises:
            StorageUnavailableError: Raised when update fails.
        """


class MappingTemplateRepositoryPort(Protocol):
    """Port definition for read-only mapping template lookup."""

    def db_mapping_template_get_by_name(self, name: str) -> MappingTemplate | None:
        """Return one mapping template by name.

        Args:
            name: Template name.

        Returns:
            MappingTemplate | None: Template, or None when absent.

        Raises:
            StorageUnavailableError: Raised when read operation fails.
        """
