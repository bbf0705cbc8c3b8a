"""Column mapping service projecting raw upload rows onto canonical fields."""

from __future__ import annotations

from balanzia.domain import MissingFieldError

from .interfaces import CANONICAL_FIELD_NAMES, REQUIRED_CANONICAL_FIELDS, MappedRow, MappingPort, MappingTemplate, RawUploadRow
from .templates import mapping_default_template


class ColumnMappingService(MappingPort):
    """Concrete mapping service selecting the first populated alias per canonical field."""

    def __init__(self, default_template: MappingTemplate | None = None):
        """Initialize column mapping service.

        Args:
            default_template: Optional template used when callers pass none.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when default template does not map required fields.
        """

        resolved_template = default_template or mapping_default_template()
        missing_required = sorted(
            field_name for field_name in REQUIRED_CANONICAL_FIELDS if not resolved_template.mapping_aliases_for(field_name)
        )
        if missing_required:
            raise ValueError(f"default template must map required fields: {', '.join(missing_required)}")

        self._default_template = resolved_template

    def mapping_default_template(self) -> MappingTemplate:
        """Return the template applied when callers select none."""

        return self._default_template

    def mapping_map_row(self, raw_row: RawUploadRow, template: MappingTemplate | None = None) -> MappedRow:
        """Map one raw row using a template or the default alias table.

        For each canonical field the first alias whose column is present with a
        non-blank value wins.

        Args:
            raw_row: Parsed upload row.
            template: Optional mapping template.

        Returns:
            MappedRow: Canonical field projection; optional fields without a
                populated alias map to None.

        Raises:
            MissingFieldError: Raised when a required field has no populated alias.
        """

        resolved_template = template or self._default_template
        mapped_fields: dict[str, str | None] = {}
        for field_name in CANONICAL_FIELD_NAMES:
            selected_value = self._mapping_select_first_populated(
                values=raw_row.values,
                aliases=resolved_template.mapping_aliases_for(field_name),
            )
            if selected_value is None and field_name in REQUIRED_CANONICAL_FIELDS:
                raise MissingFieldError(field_name)
            mapped_fields[field_name] = selected_value

        return MappedRow(row_index=raw_row.row_index, fields=mapped_fields)

    def _mapping_select_first_populated(self, values: dict[str, str], aliases: tuple[str, ...]) -> str | None:
        """Return the raw value of the first alias present with non-blank text.

        Args:
            values: Raw row values keyed by source column.
            aliases: Ordered candidate source columns.

        Returns:
            str | None: Selected raw value or None when no alias is populated.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        for alias in aliases:
            candidate_value = values.get(alias)
            if isinstance(candidate_value, str) and candidate_value.strip():
                return candidate_value
        return None
