"""Database service for transaction existence checks, bulk inserts and review updates."""

from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from balanzia.domain import (
    CanonicalTransaction,
    StorageUnavailableError,
    StoredTransaction,
    TransactionStatus,
    domain_derive_transaction_status,
    domain_normalize_optional_text,
)

from .interfaces import (
    TransactionInsertResult,
    TransactionListFilters,
    TransactionReviewRepositoryPort,
    TransactionStoreRepositoryPort,
)

_TRANSACTION_COLUMNS = (
    "transaction_id, transaction_date, merchant, amount, account, cost_center, status, identity_hash"
)


class SQLAlchemyTransactionStoreService(TransactionStoreRepositoryPort, TransactionReviewRepositoryPort):
    """SQLAlchemy implementation of the transaction storage collaborator."""

    def __init__(self, engine: Engine):
        """Initialize transaction store service.

        Args:
            engine: SQLAlchemy engine used for all persistence operations.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")

        self._engine = engine

    def db_transaction_existing_hashes(self, identity_hashes: set[str]) -> set[str]:
        """Return the subset of identity hashes already stored, in one query.

        Args:
            identity_hashes: Candidate identity hashes.

        Returns:
            set[str]: Stored identity hashes.

        Raises:
            StorageUnavailableError: Raised when the existence query fails.
        """

        if not identity_hashes:
            return set()

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(
                        "SELECT identity_hash FROM transaction_record "
                        "WHERE identity_hash = ANY(CAST(:identity_hashes AS text[]))"
                    ),
                    {"identity_hashes": sorted(identity_hashes)},
                ).mappings().all()
        except SQLAlchemyError as error:
            raise StorageUnavailableError("transaction existence query failed") from error

        return {row["identity_hash"] for row in rows}

    def db_transaction_insert_many(self, transactions: Sequence[CanonicalTransaction]) -> TransactionInsertResult:
        """Insert transactions as one bulk statement inside one DB transaction.

        Rows whose identity hash is already stored are skipped by the unique
        constraint and reported as conflicts.

        Args:
            transactions: Hashed canonical transactions.

        Returns:
            TransactionInsertResult: Inserted and conflicting identity hashes.

        Raises:
            ValueError: Raised when a transaction has no identity hash.
            StorageUnavailableError: Raised when the insert fails; nothing is written.
        """

        if not transactions:
            return TransactionInsertResult(inserted_hashes=frozenset(), conflict_hashes=frozenset())

        for transaction in transactions:
            if not transaction.identity_hash:
                raise ValueError("transaction.identity_hash must not be blank")

        try:
            with self._engine.begin() as connection:
                rows = connection.execute(
                    text(
                        "INSERT INTO transaction_record ("
                        "transaction_date, merchant, amount, account, cost_center, status, identity_hash"
                        ") SELECT * FROM unnest("
                        "CAST(:transaction_dates AS date[]), "
                        "CAST(:merchants AS text[]), "
                        "CAST(:amounts AS numeric[]), "
                        "CAST(:accounts AS text[]), "
                        "CAST(:cost_centers AS text[]), "
                        "CAST(:statuses AS text[]), "
                        "CAST(:identity_hashes AS text[])"
                        ") ON CONFLICT ON CONSTRAINT uq_transaction_record_identity_hash DO NOTHING "
                        "RETURNING identity_hash"
                    ),
                    self._db_transaction_build_insert_arrays(transactions),
                ).mappings().all()
        except SQLAlchemyError as error:
            raise StorageUnavailableError("transaction bulk insert failed") from error

        inserted_hashes = frozenset(row["identity_hash"] for row in rows)
        submitted_hashes = frozenset(transaction.identity_hash for transaction in transactions)
        return TransactionInsertResult(
            inserted_hashes=inserted_hashes,
            conflict_hashes=submitted_hashes - inserted_hashes,
        )

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
            ValueError: Raised when paging values are invalid.
            RuntimeError: Raised when read operation fails.
        """

        if limit < 1:
            raise ValueError("limit must be >= 1")
        if offset < 0:
            raise ValueError("offset must be >= 0")

        merchant_pattern = None
        if filters.merchant is not None and filters.merchant.strip():
            merchant_pattern = f"%{self._db_transaction_escape_like(filters.merchant.strip())}%"

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(
                    text(
                        f"SELECT {_TRANSACTION_COLUMNS} FROM transaction_record "
                        "WHERE (CAST(:start_date AS date) IS NULL OR transaction_date >= CAST(:start_date AS date)) "
                        "AND (CAST(:end_date AS date) IS NULL OR transaction_date <= CAST(:end_date AS date)) "
                        "AND (CAST(:merchant_pattern AS text) IS NULL OR merchant ILIKE CAST(:merchant_pattern AS text) ESCAPE '\\') "
                        "AND (CAST(:account AS text) IS NULL OR account = CAST(:account AS text)) "
                        "AND (CAST(:cost_center AS text) IS NULL OR cost_center = CAST(:cost_center AS text)) "
                        "AND (CAST(:status AS text) IS NULL OR status = CAST(:status AS text)) "
                        "ORDER BY transaction_date DESC, transaction_id DESC "
                        "LIMIT :limit OFFSET :offset"
                    ),
                    {
                        "start_date": filters.start_date,
                        "end_date": filters.end_date,
                        "merchant_pattern": merchant_pattern,
                        "account": filters.account,
                        "cost_center": filters.cost_center,
                        "status": filters.status.value if filters.status is not None else None,
                        "limit": limit,
                        "offset": offset,
                    },
                ).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError("transaction list read failed") from error

        return [self._db_transaction_map_row(row) for row in rows]

    def db_transaction_assign_cost_center(
        self,
        transaction_id: int,
        cost_center: str | None,
    ) -> StoredTransaction | None:
        """Assign or clear a cost center and re-derive status in the same statement.

        Args:
            transaction_id: Stored transaction identifier.
            cost_center: New cost center; None or blank clears it, inner whitespace runs collapse.

        Returns:
            StoredTransaction | None: Updated transaction, or None when absent.

        Raises:
            StorageUnavailableError: Raised when update fails.
        """

        normalized_cost_center = domain_normalize_optional_text(cost_center)
        derived_status = domain_derive_transaction_status(normalized_cost_center)

        try:
            with self._engine.begin() as connection:
                row = connection.execute(
                    text(
                        "UPDATE transaction_record SET "
                        "cost_center = :cost_center, status = :status, updated_at_utc = now() "
                        "WHERE transaction_id = :transaction_id "
                        f"RETURNING {_TRANSACTION_COLUMNS}"
                    ),
                    {
                        "transaction_id": transaction_id,
                        "cost_center": normalized_cost_center,
                        "status": derived_status.value,
                    },
                ).mappings().fetchone()
        except SQLAlchemyError as error:
            raise StorageUnavailableError("transaction cost center update failed") from error

        if row is None:
            return None
        return self._db_transaction_map_row(row)

    def _db_transaction_build_insert_arrays(self, transactions: Sequence[CanonicalTransaction]) -> dict[str, list[Any]]:
        """Pivot transactions into column arrays for one `unnest` insert.

        Args:
            transactions: Hashed canonical transactions.

        Returns:
            dict[str, list[Any]]: Column name to ordered column values.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "transaction_dates": [transaction.transaction_date for transaction in transactions],
            "merchants": [transaction.merchant for transaction in transactions],
            "amounts": [transaction.amount for transaction in transactions],
            "accounts": [transaction.account for transaction in transactions],
            "cost_centers": [transaction.cost_center for transaction in transactions],
            "statuses": [domain_derive_transaction_status(transaction.cost_center).value for transaction in transactions],
            "identity_hashes": [transaction.identity_hash for transaction in transactions],
        }

    def _db_transaction_map_row(self, row: Any) -> StoredTransaction:
        """Map SQL row payload into typed stored transaction.

        Args:
            row: SQLAlchemy row mapping.

        Returns:
            StoredTransaction: Typed stored transaction.

        Raises:
            ValueError: Raised when status column holds an unknown value.
        """

        transaction_date = row["transaction_date"]
        if isinstance(transaction_date, str):
            transaction_date = date.fromisoformat(transaction_date)

        return StoredTransaction(
            transaction_id=int(row["transaction_id"]),
            transaction=CanonicalTransaction(
                transaction_date=transaction_date,
                merchant=row["merchant"],
                amount=row["amount"],
                account=row["account"],
                cost_center=row["cost_center"],
                status=TransactionStatus(row["status"]),
                identity_hash=row["identity_hash"],
            ),
        )

    def _db_transaction_escape_like(self, value: str) -> str:
        """Escape LIKE wildcards so merchant filters match literally."""

        return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
