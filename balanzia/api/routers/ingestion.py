"""Upload API router composition for statement file ingestion."""

from __future__ import annotations

from fastapi import APIRouter, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from balanzia.config import AppSettings
from balanzia.domain import BatchUnparseableError, IngestionRequestError, IngestionResult, StorageUnavailableError
from balanzia.jobs import IngestionExecutionResult, IngestionOrchestratorPort
from balanzia.mapping import DELIMITED_TEXT_FILE_KIND

_FAILURE_STATUS_CODES = {
    BatchUnparseableError.error_code: status.HTTP_422_UNPROCESSABLE_ENTITY,
    StorageUnavailableError.error_code: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def api_create_ingestion_router(
    settings: AppSettings,
    ingestion_orchestrator: IngestionOrchestratorPort,
) -> APIRouter:
    """Create upload router exposing `/api/upload`.

    Args:
        settings: Runtime settings used for upload size limits.
        ingestion_orchestrator: Job orchestrator executing the ingestion pipeline.

    Returns:
        APIRouter: Router exposing upload ingestion.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if ingestion_orchestrator is None:
        raise ValueError("ingestion_orchestrator must not be None")

    router = APIRouter(prefix="/api", tags=["ingestion"])

    @router.post("/upload")
    def api_ingestion_upload(
        file: UploadFile | None = File(default=None),
        mapping_template: str | None = Form(default=None),
        file_kind: str = Form(default=DELIMITED_TEXT_FILE_KIND),
    ) -> JSONResponse:
        """Ingest one uploaded statement file.

        Args:
            file: Uploaded statement file.
            mapping_template: Optional stored mapping template name.
            file_kind: Declared file kind.

        Returns:
            JSONResponse: Ingestion summary, or error payload with retry hint.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        if file is None:
            payload = {"status": "error", "code": "UPLOAD_MISSING", "message": "No file uploaded."}
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        payload_bytes = file.file.read(settings.ingestion_max_upload_bytes + 1)
        if len(payload_bytes) > settings.ingestion_max_upload_bytes:
            payload = {
                "status": "error",
                "code": "UPLOAD_TOO_LARGE",
                "message": f"upload exceeds {settings.ingestion_max_upload_bytes} bytes",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)

        try:
            execution_result = ingestion_orchestrator.job_ingest_upload(
                payload_bytes=payload_bytes,
                mapping_template_name=mapping_template,
                file_kind=file_kind,
            )
        except IngestionRequestError as error:
            payload = {"status": "error", "code": error.error_code, "message": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        if not execution_result.execution_succeeded():
            return JSONResponse(
                content=api_serialize_ingestion_failure(execution_result),
                status_code=_FAILURE_STATUS_CODES.get(
                    execution_result.error_code or "",
                    status.HTTP_500_INTERNAL_SERVER_ERROR,
                ),
            )

        payload = {
            "status": "success",
            "message": "File processed successfully!",
            "file_name": file.filename,
            "summary": api_serialize_ingestion_result(execution_result.result),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_ingestion_result(result: IngestionResult | None) -> dict[str, object] | None:
    """Serialize typed ingestion summary to JSON response payload.

    Args:
        result: Typed ingestion summary.

    Returns:
        dict[str, object] | None: JSON-serializable summary, None when absent.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if result is None:
        return None

    return {
        "total_parsed": result.total_parsed,
        "new_count": result.new_count,
        "duplicate_count": result.duplicate_count,
        "rejected_rows": [
            {
                "row_index": rejection.row_index,
                "reason": rejection.reason,
                "detail": rejection.detail,
                "label": rejection.rejection_label(),
            }
            for rejection in result.rejected_rows
        ],
    }


def api_serialize_ingestion_failure(execution_result: IngestionExecutionResult) -> dict[str, object]:
    """Serialize a failed ingestion into an error payload that carries the retry hint."""

    return {
        "status": "error",
        "code": execution_result.error_code,
        "message": execution_result.error_message,
        "retryable": execution_result.retryable,
        "summary": None,
    }
