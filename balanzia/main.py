"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or ingests one statement file from disk.
"""

import argparse
import json
from pathlib import Path

import uvicorn

from balanzia.api.routers.ingestion import api_serialize_ingestion_failure, api_serialize_ingestion_result
from balanzia.bootstrap import bootstrap_create_application, bootstrap_create_ingestion_orchestrator
from balanzia.config import config_load_settings
from balanzia.domain import IngestionRequestError


def main(argv: list[str] | None = None) -> None:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list; defaults to process arguments.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when file ingestion fails.
    """

    argument_parser = argparse.ArgumentParser(description="Balanzia statement ingestion runtime entrypoint")
    subparsers = argument_parser.add_subparsers(dest="command")
    subparsers.add_parser("api", help="Start the HTTP service")
    ingest_parser = subparsers.add_parser("ingest-file", help="Ingest one statement file and print its summary")
    ingest_parser.add_argument("path", type=Path, help="Path to a delimited statement file")
    ingest_parser.add_argument(
        "--mapping-template",
        dest="mapping_template",
        type=str,
        help="Optional stored mapping template name",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    if parsed_arguments.command == "ingest-file":
        main_ingest_file(parsed_arguments.path, parsed_arguments.mapping_template)
        return

    settings = config_load_settings()
    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_ingest_file(path: Path, mapping_template: str | None = None) -> None:
    """Ingest one file from disk and print the JSON outcome to stdout.

    Args:
        path: Statement file path.
        mapping_template: Optional stored mapping template name.

    Returns:
        None: Prints the summary as side effect.

    Raises:
        SystemExit: Raised with code 1 when the file is unreadable or ingestion fails.
    """

    try:
        payload_bytes = path.read_bytes()
    except OSError as error:
        print(json.dumps({"status": "error", "code": "FILE_UNREADABLE", "message": str(error)}))
        raise SystemExit(1) from error

    ingestion_orchestrator = bootstrap_create_ingestion_orchestrator()
    try:
        execution_result = ingestion_orchestrator.job_ingest_upload(
            payload_bytes=payload_bytes,
            mapping_template_name=mapping_template,
        )
    except IngestionRequestError as error:
        print(json.dumps({"status": "error", "code": error.error_code, "message": str(error)}))
        raise SystemExit(1) from error

    if not execution_result.execution_succeeded():
        print(json.dumps(api_serialize_ingestion_failure(execution_result)))
        raise SystemExit(1)

    print(json.dumps({"status": "success", "summary": api_serialize_ingestion_result(execution_result.result)}))


if __name__ == "__main__":
    main()
