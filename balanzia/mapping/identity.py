"""Identity fingerprint for canonical transactions.

The identity hash is SHA-256 over the compact JSON array
`[date_iso, merchant, amount, account]`. Cost center and status never take part,
so later review edits keep the same identity.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
import hashlib
import json

from balanzia.domain import CanonicalTransaction, domain_canonical_amount_text


def mapping_compute_identity_hash(transaction_date: date, merchant: str, amount: Decimal, account: str) -> str:
    """Compute the deterministic identity hash of one transaction.

    Args:
        transaction_date: Calendar date.
        merchant: Normalized merchant text.
        amount: Signed amount.
        account: Normalized account label.

    Returns:
        str: Lowercase 64-character SHA-256 hex digest.

    Raises:
        ValueError: Raised when amount is not finite.
    """

    identity_payload = json.dumps(
        [transaction_date.isoformat(), merchant, domain_canonical_amount_text(amount), account],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(identity_payload.encode("utf-8")).hexdigest()


def mapping_attach_identity_hash(transaction: CanonicalTransaction) -> CanonicalTransaction:
    """Return a copy of the transaction carrying its identity hash."""

    return replace(
        transaction,
        identity_hash=mapping_compute_identity_hash(
            transaction_date=transaction.transaction_date,
            merchant=transaction.merchant,
            amount=transaction.amount,
            account=transaction.account,
        ),
    )
