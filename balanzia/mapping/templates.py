"""Mapping template construction and the built-in default alias table."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .interfaces import (
    CANONICAL_FIELD_ACCOUNT,
    CANONICAL_FIELD_AMOUNT,
    CANONICAL_FIELD_DATE,
    CANONICAL_FIELD_MERCHANT,
    CANONICAL_FIELD_NAMES,
    DELIMITED_TEXT_FILE_KIND,
    REQUIRED_CANONICAL_FIELDS,
    SUPPORTED_FILE_KINDS,
    MappingTemplate,
)

DEFAULT_TEMPLATE_NAME = "default"

DEFAULT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    CANONICAL_FIELD_DATE: ("Date", "Transaction Date", "Posted Date", "Posting Date"),
    CANONICAL_FIELD_MERCHANT: ("Merchant", "Description", "Payee"),
    CANONICAL_FIELD_AMOUNT: ("Amount", "Debit"),
    CANONICAL_FIELD_ACCOUNT: ("Account", "Account Name", "Card"),
}


def mapping_default_template() -> MappingTemplate:
    """Return the built-in alias table used when no template is selected.

    Returns:
        MappingTemplate: Default delimited-text template.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return MappingTemplate(
        name=DEFAULT_TEMPLATE_NAME,
        file_kind=DELIMITED_TEXT_FILE_KIND,
        field_aliases=dict(DEFAULT_FIELD_ALIASES),
    )


def mapping_build_template(
    name: str,
    file_kind: str,
    field_aliases: Mapping[str, Sequence[str] | str],
) -> MappingTemplate:
    """Validate raw template configuration and build a typed template.

    A single string alias is accepted in place of a one-element list.

    Args:
        name: Template name.
        file_kind: File kind label.
        field_aliases: Canonical field to accepted source column names.

    Returns:
        MappingTemplate: Validated template with trimmed, de-duplicated aliases.

    Raises:
        ValueError: Raised when name is blank, file kind is unsupported, a field is
            unknown, or a required field has no alias.
    """

    normalized_name = name.strip() if isinstance(name, str) else ""
    if not normalized_name:
        raise ValueError("template name must not be blank")

    normalized_file_kind = file_kind.strip() if isinstance(file_kind, str) else ""
    if normalized_file_kind not in SUPPORTED_FILE_KINDS:
        raise ValueError(f"unsupported file_kind={file_kind} for template={normalized_name}")

    unknown_fields = sorted(set(field_aliases) - set(CANONICAL_FIELD_NAMES))
    if unknown_fields:
        raise ValueError(f"template={normalized_name} maps unknown canonical fields: {', '.join(unknown_fields)}")

    normalized_aliases: dict[str, tuple[str, ...]] = {}
    for field_name in CANONICAL_FIELD_NAMES:
        raw_aliases = field_aliases.get(field_name, ())
        if isinstance(raw_aliases, str):
            raw_aliases = (raw_aliases,)

        aliases: list[str] = []
        for alias in raw_aliases:
            if not isinstance(alias, str):
                raise ValueError(f"template={normalized_name} alias for {field_name} must be a string")
            stripped_alias = alias.strip()
            if stripped_alias and stripped_alias not in aliases:
                aliases.append(stripped_alias)

        if field_name in REQUIRED_CANONICAL_FIELDS and not aliases:
            raise ValueError(f"template={normalized_name} must map required field {field_name}")
        if aliases:
            normalized_aliases[field_name] = tuple(aliases)

    return MappingTemplate(
        name=normalized_name,
        file_kind=normalized_file_kind,
        field_aliases=normalized_aliases,
    )
