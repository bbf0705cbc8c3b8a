"""Regression tests for transaction list and cost center assignment endpoints."""
# pylint: disable=duplicate-code

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from fastapi.testclient import TestClient

from balanzia.api.application import create_api_application
from balanzia.config import AppSettings
from balanzia.db import TransactionListFilters
from balanzia.domain import (
    CanonicalTransaction,
    HealthStatus,
    StorageUnavailableError,
    StoredTransaction,
    TransactionStatus,
    domain_derive_transaction_status,
    domain_normalize_optional_text,
)


class _HealthyDatabaseService:
    """Database health stub for API tests."""

    def db_connection_label(self) -> str:
        return "postgresql://test"

    def db_check_health(self) -> HealthStatus:
        return HealthStatus(status="ok", detail="transaction store reachable in 1 ms")


class _IngestionOrchestratorStub:
    """Orchestrator stub for API factory dependency injection."""

    def job_ingest_upload(self, payload_bytes: bytes, mapping_template_name=None, file_kind="delimited_text"):
        raise AssertionError("transaction APIs must not ingest")


class _TransactionRepositoryStub:
    """In-memory review repository capturing list calls."""

    def __init__(self, stored_transactions: list[StoredTransaction], fail_updates: bool = False):
        """Initialize repository stub.

        Args:
            stored_transactions: Transactions returned by list calls.
            fail_updates: Whether updates raise a storage error.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self._stored_transactions = {stored.transaction_id: stored for stored in stored_transactions}
        self._fail_updates = fail_updates
        self.list_calls: list[dict[str, object]] = []

    def db_transaction_list(self, filters: TransactionListFilters, limit: int, offset: int) -> list[StoredTransaction]:
        self.list_calls.append({"filters": filters, "limit": limit, "offset": offset})
        return list(self._stored_transactions.values())[offset : offset + limit]

    def db_transaction_assign_cost_center(self, transaction_id: int, cost_center: str | None) -> StoredTransaction | None:
        """Apply cost center and re-derive status on the stored copy.

        Args:
            transaction_id: Target transaction.
            cost_center: New cost center.

        Returns:
            StoredTransaction | None: Updated transaction or None when absent.

        Raises:
            StorageUnavailableError: Raised when configured to fail.
        """

        if self._fail_updates:
            raise StorageUnavailableError("transaction cost center update failed")
        stored = self._stored_transactions.get(transaction_id)
        if stored is None:
            return None
        normalized_cost_center = domain_normalize_optional_text(cost_center)
        updated = replace(
            stored,
            transaction=replace(
                stored.transaction,
                cost_center=normalized_cost_center,
                status=domain_derive_transaction_status(normalized_cost_center),
            ),
        )
        self._stored_transactions[transaction_id] = updated
        return updated


def _build_stored_transaction(transaction_id: int, merchant: str = "Coffee Shop") -> StoredTransaction:
    return StoredTransaction(
        transaction_id=transaction_id,
        transaction=CanonicalTransaction(
            transaction_date=date(2024, 1, transaction_id),
            merchant=merchant,
            amount=Decimal("-4.50"),
            account="Checking",
            identity_hash=f"hash-{transaction_id}",
        ),
    )


def _build_client(repository: _TransactionRepositoryStub) -> TestClient:
    settings = AppSettings(environment_name="test", api_default_limit=2, api_max_limit=5)
    application = create_api_application(settings, _HealthyDatabaseService(), _IngestionOrchestratorStub(), repository)
    return TestClient(application)


def test_api_transactions_list_passes_filters_and_serializes_rows() -> None:
    """Forward trimmed filters and render exact decimal amounts.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    repository = _TransactionRepositoryStub([_build_stored_transaction(5)])
    client = _build_client(repository)

    response = client.get(
        "/api/transactions",
        params={
            "start_date": "2024-01-01",
            "end_date": "2024-01-31",
            "merchant": " coffee ",
            "account": "Checking",
            "status": "Review Required",
        },
    )

    assert response.status_code == 200
    filters = repository.list_calls[0]["filters"]
    assert filters.start_date == date(2024, 1, 1)
    assert filters.end_date == date(2024, 1, 31)
    assert filters.merchant == "coffee"
    assert filters.status == TransactionStatus.REVIEW_REQUIRED
    assert filters.cost_center is None
    assert response.json()["items"] == [
        {
            "transaction_id": 5,
            "date": "2024-01-05",
            "merchant": "Coffee Shop",
            "amount": "-4.50",
            "account": "Checking",
            "cost_center": None,
            "status": "Review Required",
            "identity_hash": "hash-5",
        }
    ]


def test_api_transactions_list_applies_default_and_clamped_limits() -> None:
    repository = _TransactionRepositoryStub([_build_stored_transaction(day) for day in range(1, 8)])
    client = _build_client(repository)

    default_response = client.get("/api/transactions")
    clamped_response = client.get("/api/transactions", params={"limit": 50, "offset": 1})

    assert default_response.json()["page"] == {"limit": 2, "applied_limit": 2, "offset": 0, "returned": 2}
    assert clamped_response.json()["page"] == {"limit": 50, "applied_limit": 5, "offset": 1, "returned": 5}
    assert repository.list_calls[1]["limit"] == 5


def test_api_transactions_list_rejects_unknown_status_and_inverted_range() -> None:
    client = _build_client(_TransactionRepositoryStub([]))

    status_response = client.get("/api/transactions", params={"status": "Archived"})
    range_response = client.get("/api/transactions", params={"start_date": "2024-02-01", "end_date": "2024-01-01"})

    assert status_response.status_code == 400
    assert status_response.json()["code"] == "INVALID_STATUS"
    assert range_response.status_code == 400
    assert range_response.json()["code"] == "INVALID_DATE_RANGE"


def test_api_transactions_assign_cost_center_marks_processed_and_clears() -> None:
    """Assigning sets `Processed`; clearing with blank restores `Review Required`."""

    client = _build_client(_TransactionRepositoryStub([_build_stored_transaction(3)]))

    assigned_response = client.put("/api/transactions/3", json={"costCenter": "Marketing"})
    cleared_response = client.put("/api/transactions/3", json={"cost_center": "  "})

    assert assigned_response.status_code == 200
    assert assigned_response.json()["cost_center"] == "Marketing"
    assert assigned_response.json()["status"] == "Processed"
    assert assigned_response.json()["identity_hash"] == "hash-3"
    assert cleared_response.json()["cost_center"] is None
    assert cleared_response.json()["status"] == "Review Required"


def test_api_transactions_assign_cost_center_returns_not_found() -> None:
    response = _build_client(_TransactionRepositoryStub([])).put("/api/transactions/99", json={"cost_center": "Ops"})

    assert response.status_code == 404


def test_api_transactions_assign_cost_center_reports_storage_failure() -> None:
    repository = _TransactionRepositoryStub([_build_stored_transaction(1)], fail_updates=True)

    response = _build_client(repository).put("/api/transactions/1", json={"cost_center": "Ops"})

    assert response.status_code == 503
    assert response.json()["code"] == "STORAGE_UNAVAILABLE"
    assert response.json()["retryable"] is True
