"""Delimited-text extraction of raw upload rows."""

from __future__ import annotations

import csv
from dataclasses import dataclass
import io

from balanzia.domain import BatchUnparseableError
from balanzia.mapping import RawUploadRow

_SNIFF_SAMPLE_CHARACTERS = 8192
_SUPPORTED_DELIMITERS = ",;\t|"
_DEFAULT_DELIMITER = ","


@dataclass(frozen=True)
class RawPayloadExtractionResult:
    """Extraction result contract for one uploaded delimited-text payload.

    Attributes:
        header: Trimmed header cells in file order.
        delimiter: Detected field delimiter.
        rows: Extracted data rows, blank lines skipped.
    """

    header: tuple[str, ...]
    delimiter: str
    rows: list[RawUploadRow]


def job_raw_extract_delimited_rows(payload_bytes: bytes) -> RawPayloadExtractionResult:
    """Decode and parse an uploaded delimited-text payload into raw rows.

    Args:
        payload_bytes: Raw uploaded file bytes.

    Returns:
        RawPayloadExtractionResult: Header, detected delimiter and data rows.

    Raises:
        BatchUnparseableError: Raised when payload is empty, not UTF-8 text,
            structurally broken, or has no header row.
    """

    payload_text = _job_raw_decode_payload(payload_bytes)
    delimiter = _job_raw_detect_delimiter(payload_text[:_SNIFF_SAMPLE_CHARACTERS])
    reader = csv.reader(io.StringIO(payload_text, newline=""), delimiter=delimiter, quotechar='"', strict=True)

    header: tuple[str, ...] | None = None
    rows: list[RawUploadRow] = []
    try:
        for cells in reader:
            if not any(cell.strip() for cell in cells):
                continue
            if header is None:
                header = tuple(cell.strip() for cell in cells)
                continue
            rows.append(RawUploadRow(row_index=len(rows) + 1, values=_job_raw_build_row_values(header, cells)))
    except csv.Error as error:
        raise BatchUnparseableError(f"malformed delimited text near line {reader.line_num}: {error}") from error

    if header is None:
        raise BatchUnparseableError("upload has no header row")

    return RawPayloadExtractionResult(header=header, delimiter=delimiter, rows=rows)


def _job_raw_decode_payload(payload_bytes: bytes) -> str:
    """Decode upload bytes as UTF-8 text, tolerating a byte-order mark.

    Args:
        payload_bytes: Raw uploaded file bytes.

    Returns:
        str: Decoded text.

    Raises:
        BatchUnparseableError: Raised when payload is empty, binary or not UTF-8.
    """

    if not payload_bytes:
        raise BatchUnparseableError("upload is empty")

    try:
        payload_text = payload_bytes.decode("utf-8-sig")
    except UnicodeDecodeError as error:
        raise BatchUnparseableError(f"upload is not valid UTF-8 text: {error.reason} at byte {error.start}") from error

    if "\x00" in payload_text:
        raise BatchUnparseableError("upload contains NUL bytes and is not delimited text")
    if not payload_text.strip():
        raise BatchUnparseableError("upload is empty")
    return payload_text


def _job_raw_detect_delimiter(sample_text: str) -> str:
    """Detect the field delimiter from a leading text sample.

    Args:
        sample_text: Leading characters of the payload.

    Returns:
        str: Detected delimiter, or comma when detection is inconclusive.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    try:
        dialect = csv.Sniffer().sniff(sample_text, delimiters=_SUPPORTED_DELIMITERS)
    except csv.Error:
        return _DEFAULT_DELIMITER
    return dialect.delimiter


def _job_raw_build_row_values(header: tuple[str, ...], cells: list[str]) -> dict[str, str]:
    """Zip header and data cells into a column-keyed row.

    Blank header cells are ignored, the first occurrence of a repeated header
    wins, extra cells are dropped and short rows leave trailing columns absent.

    Args:
        header: Trimmed header cells.
        cells: Data row cells.

    Returns:
        dict[str, str]: Source column name to raw value.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    values: dict[str, str] = {}
    for column_name, cell in zip(header, cells):
        if not column_name or column_name in values:
            continue
        values[column_name] = cell
    return values
