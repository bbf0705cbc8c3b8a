"""Transaction API router composition for listing and cost center assignment."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Body, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from balanzia.config import AppSettings
from balanzia.db import TransactionListFilters, TransactionReviewRepositoryPort
from balanzia.domain import StorageUnavailableError, StoredTransaction, TransactionStatus


class CostCenterAssignmentRequest(BaseModel):
    """Request body for assigning or clearing a transaction cost center."""

    model_config = ConfigDict(populate_by_name=True)

    cost_center: str | None = Field(default=None, alias="costCenter")


def api_create_transactions_router(
    settings: AppSettings,
    transaction_repository: TransactionReviewRepositoryPort,
) -> APIRouter:
    """Create transaction router with list and cost center assignment endpoints.

    Args:
        settings: Runtime settings used for pagination defaults.
        transaction_repository: DB-layer transaction review repository.

    Returns:
        APIRouter: Router exposing transaction APIs.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if transaction_repository is None:
        raise ValueError("transaction_repository must not be None")

    router = APIRouter(prefix="/api/transactions", tags=["transactions"])

    @router.get("")
    def api_transaction_list(
        start_date: date | None = Query(default=None),
        end_date: date | None = Query(default=None),
        merchant: str | None = Query(default=None),
        account: str | None = Query(default=None),
        cost_center: str | None = Query(default=None),
        status_filter: str | None = Query(default=None, alias="status"),
        limit: int = Query(default=settings.api_default_limit, ge=1),
        offset: int = Query(default=0, ge=0),
    ) -> JSONResponse:
        """Return stored transactions ordered by date descending.

        Returns:
            JSONResponse: Transaction list payload.

        Raises:
            RuntimeError: Raised when repository read fails.
        """

        resolved_status = None
        if status_filter is not None and status_filter.strip():
            try:
                resolved_status = TransactionStatus(status_filter.strip())
            except ValueError:
                payload = {
                    "status": "error",
                    "code": "INVALID_STATUS",
                    "message": f"unsupported status={status_filter.strip()}",
                }
                return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        if start_date is not None and end_date is not None and start_date > end_date:
            payload = {
                "status": "error",
                "code": "INVALID_DATE_RANGE",
                "message": "start_date must not be after end_date",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        filters = TransactionListFilters(
            start_date=start_date,
            end_date=end_date,
            merchant=_api_optional_query_text(merchant),
            account=_api_optional_query_text(account),
            cost_center=_api_optional_query_text(cost_center),
            status=resolved_status,
        )
        applied_limit = min(limit, settings.api_max_limit)
        stored_transactions = transaction_repository.db_transaction_list(
            filters=filters,
            limit=applied_limit,
            offset=offset,
        )
        payload = {
            "items": [api_serialize_stored_transaction(stored) for stored in stored_transactions],
            "page": {
                "limit": limit,
                "applied_limit": applied_limit,
                "offset": offset,
                "returned": len(stored_transactions),
            },
            "filters": {
                "start_date": start_date.isoformat() if start_date else None,
                "end_date": end_date.isoformat() if end_date else None,
                "merchant": filters.merchant,
                "account": filters.account,
                "cost_center": filters.cost_center,
                "status": resolved_status.value if resolved_status else None,
            },
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.put("/{transaction_id}")
    def api_transaction_assign_cost_center(
        transaction_id: int,
        request: CostCenterAssignmentRequest = Body(...),
    ) -> JSONResponse:
        """Assign or clear one transaction's cost center; status follows the assignment.

        Args:
            transaction_id: Stored transaction identifier.
            request: Cost center assignment body.

        Returns:
            JSONResponse: Updated transaction, 404 when absent, 503 on storage failure.

        Raises:
            RuntimeError: Raised when update fails unexpectedly.
        """

        try:
            stored_transaction = transaction_repository.db_transaction_assign_cost_center(
                transaction_id=transaction_id,
                cost_center=request.cost_center,
            )
        except StorageUnavailableError as error:
            payload = {"status": "error", "code": error.error_code, "message": str(error), "retryable": True}
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        if stored_transaction is None:
            payload = {"status": "error", "message": "transaction not found"}
            return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)

        return JSONResponse(
            content=api_serialize_stored_transaction(stored_transaction),
            status_code=status.HTTP_200_OK,
        )

    return router


def api_serialize_stored_transaction(stored_transaction: StoredTransaction) -> dict[str, object]:
    """Serialize typed stored transaction to JSON response payload.

    Amounts are rendered as decimal strings to keep exact values.

    Args:
        stored_transaction: Typed stored transaction.

    Returns:
        dict[str, object]: JSON-serializable transaction payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    transaction = stored_transaction.transaction
    return {
        "transaction_id": stored_transaction.transaction_id,
        "date": transaction.transaction_date.isoformat(),
        "merchant": transaction.merchant,
        "amount": str(transaction.amount),
        "account": transaction.account,
        "cost_center": transaction.cost_center,
        "status": transaction.status.value,
        "identity_hash": transaction.identity_hash,
    }


def _api_optional_query_text(value: str | None) -> str | None:
    if value is None:
        return None
    stripped_value = value.strip()
    return stripped_value or None
