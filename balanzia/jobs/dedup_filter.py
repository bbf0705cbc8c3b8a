"""Batch dedup partitioning against stored identity hashes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from balanzia.db import TransactionStoreRepositoryPort
from balanzia.domain import CanonicalTransaction


@dataclass(frozen=True)
class DedupPartition:
    """Split of one hashed batch into new and duplicate transactions.

    Attributes:
        new_transactions: First occurrences whose identity is not stored, in batch order.
        duplicate_transactions: Stored identities and in-batch repeats, in batch order.
        stored_hash_count: Number of distinct batch identities already stored.
    """

    new_transactions: tuple[CanonicalTransaction, ...]
    duplicate_transactions: tuple[CanonicalTransaction, ...]
    stored_hash_count: int


def job_dedup_partition(
    transactions: Sequence[CanonicalTransaction],
    transaction_repository: TransactionStoreRepositoryPort,
) -> DedupPartition:
    """Partition a hashed batch using one bulk existence query.

    The first occurrence of an identity within the batch wins; later repeats
    are duplicates even when the identity is not stored yet.

    Args:
        transactions: Hashed canonical transactions in upload order.
        transaction_repository: Storage collaborator answering the existence query.

    Returns:
        DedupPartition: New and duplicate transactions.

    Raises:
        ValueError: Raised when one transaction carries no identity hash.
        StorageUnavailableError: Raised when the existence query fails.
    """

    if not transactions:
        return DedupPartition(new_transactions=(), duplicate_transactions=(), stored_hash_count=0)

    candidate_hashes: set[str] = set()
    for transaction in transactions:
        if not transaction.identity_hash:
            raise ValueError("transaction.identity_hash must not be blank before dedup")
        candidate_hashes.add(transaction.identity_hash)

    stored_hashes = transaction_repository.db_transaction_existing_hashes(candidate_hashes) & candidate_hashes

    seen_hashes: set[str] = set()
    new_transactions: list[CanonicalTransaction] = []
    duplicate_transactions: list[CanonicalTransaction] = []
    for transaction in transactions:
        if transaction.identity_hash in stored_hashes or transaction.identity_hash in seen_hashes:
            duplicate_transactions.append(transaction)
        else:
            new_transactions.append(transaction)
        seen_hashes.add(transaction.identity_hash)

    return DedupPartition(
        new_transactions=tuple(new_transactions),
        duplicate_transactions=tuple(duplicate_transactions),
        stored_hash_count=len(stored_hashes),
    )
