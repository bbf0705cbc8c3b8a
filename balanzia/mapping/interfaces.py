"""Typed interfaces for mapping-layer transformations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

CANONICAL_FIELD_DATE = "date"
CANONICAL_FIELD_MERCHANT = "merchant"
CANONICAL_FIELD_AMOUNT = "amount"
CANONICAL_FIELD_ACCOUNT = "account"

CANONICAL_FIELD_NAMES = (
    CANONICAL_FIELD_DATE,
    CANONICAL_FIELD_MERCHANT,
    CANONICAL_FIELD_AMOUNT,
    CANONICAL_FIELD_ACCOUNT,
)
REQUIRED_CANONICAL_FIELDS = frozenset({CANONICAL_FIELD_DATE, CANONICAL_FIELD_MERCHANT, CANONICAL_FIELD_AMOUNT})

DELIMITED_TEXT_FILE_KIND = "delimited_text"
SUPPORTED_FILE_KINDS = frozenset({DELIMITED_TEXT_FILE_KIND})


@dataclass(frozen=True)
class RawUploadRow:
    """One parsed data line of an uploaded file.

    Attributes:
        row_index: One-based data row index (header excluded).
        values: Source column name to raw string value.
    """

    row_index: int
    values: dict[str, str]


@dataclass(frozen=True)
class MappingTemplate:
    """Named column layout for one file kind.

    Attributes:
        name: Template name.
        file_kind: File kind the template applies to.
        field_aliases: Canonical field to ordered accepted source column names.
    """

    name: str
    file_kind: str
    field_aliases: dict[str, tuple[str, ...]]

    def mapping_aliases_for(self, field_name: str) -> tuple[str, ...]:
        """Return ordered source column candidates for one canonical field.

        Args:
            field_name: Canonical field name.

        Returns:
            tuple[str, ...]: Candidate source columns, empty when unmapped.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self.field_aliases.get(field_name, ())


@dataclass(frozen=True)
class MappedRow:
    """Raw row projected onto canonical field names.

    Attributes:
        row_index: One-based data row index.
        fields: Canonical field name to raw string value; None when optional field is absent.
    """

    row_index: int
    fields: dict[str, str | None]


class MappingPort(Protocol):
    """Port definition for projecting raw upload rows onto canonical fields."""

    def mapping_map_row(self, raw_row: RawUploadRow, template: MappingTemplate | None = None) -> MappedRow:
        """Map one raw row using a template or the default alias table.

        Args:
            raw_row: Parsed upload row.
            template: Optional mapping template.

        Returns:
            MappedRow: Canonical field projection.

        Raises:
            MissingFieldError: Raised when a required field has no populated alias.
        """
