"""Shared text, date and amount parsing helpers for uploaded statement values.

This module centralizes normalization logic used by the row normalizer and the
identity hasher so that canonical values stay deterministic across uploads.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import re

_DOMAIN_WHITESPACE_PATTERN = re.compile(r"\s+")
_DOMAIN_AMOUNT_PATTERN = re.compile(
    r"^(?P<sign>[+-]?) ?(?P<integer>\d{1,3}(?:,\d{3})+|\d*)(?P<fraction>\.\d*)?$"
)
_DOMAIN_TIME_SUFFIX_PATTERN = re.compile(
    r"^(?:[01]?\d|2[0-3]):[0-5]\d(?::[0-5]\d(?:\.\d{1,6})?)?"
    r"(?: ?[AaPp][Mm])?"
    r"(?: ?(?:Z|[+-](?:[01]\d|2[0-3]):?[0-5]\d))?$"
)


def domain_normalize_optional_text(value: object | None) -> str | None:
    """Trim one optional text value and collapse internal whitespace runs.

    Args:
        value: Candidate value from an uploaded row.

    Returns:
        str | None: Normalized text or None when missing/blank.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None or not isinstance(value, str):
        return None

    normalized_value = _DOMAIN_WHITESPACE_PATTERN.sub(" ", value).strip()
    if not normalized_value:
        return None
    return normalized_value


def domain_parse_transaction_date(value: str, date_formats: tuple[str, ...]) -> date | None:
    """Parse one transaction date using an ordered list of accepted formats.

    A trailing time of day separated by `T` or a space is ignored; any other
    trailing text makes the value unparseable.

    Args:
        value: Candidate date text.
        date_formats: Ordered `strptime` formats; first match wins.

    Returns:
        date | None: Parsed calendar date, or None when no format matches.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    normalized_value = value.strip()
    if not normalized_value:
        return None

    for candidate in _domain_build_date_candidates(normalized_value):
        for date_format in date_formats:
            try:
                return datetime.strptime(candidate, date_format).date()
            except ValueError:
                continue
    return None


def domain_parse_amount(value: str) -> Decimal | None:
    """Parse one signed decimal amount with optional comma thousands separators.

    Only surrounding whitespace and one space after a leading sign are tolerated;
    digits split by inner spaces are rejected.

    Args:
        value: Candidate amount text, e.g. `-4.50`, `+1,234.00`, `.5`, `- 4.50`.

    Returns:
        Decimal | None: Parsed finite amount, or None when the text is not a number.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    normalized_value = value.strip()
    match = _DOMAIN_AMOUNT_PATTERN.match(normalized_value)
    if match is None:
        return None

    integer_part = match.group("integer").replace(",", "")
    fraction_part = match.group("fraction") or ""
    if not any(character.isdigit() for character in integer_part + fraction_part):
        return None

    try:
        parsed_amount = Decimal(f"{match.group('sign')}{integer_part}{fraction_part}")
    except InvalidOperation:
        return None
    if not parsed_amount.is_finite():
        return None
    return parsed_amount


def domain_canonical_amount_text(amount: Decimal) -> str:
    """Render an amount as plain decimal text without trailing fractional zeros.

    Args:
        amount: Finite decimal amount.

    Returns:
        str: Canonical text; `-4.50` renders as `-4.5`, negative zero as `0`.

    Raises:
        ValueError: Raised when amount is not finite.
    """

    if not amount.is_finite():
        raise ValueError("amount must be finite")
    if amount.is_zero():
        return "0"

    normalized_amount = amount.normalize()
    if normalized_amount == normalized_amount.to_integral_value():
        normalized_amount = normalized_amount.quantize(Decimal(1))
    return format(normalized_amount, "f")


def _domain_build_date_candidates(value: str) -> list[str]:
    """Build date-only candidates from one date or timestamp text.

    A prefix before a `T` or space becomes a candidate only when everything after
    that separator reads as a time of day, optionally with AM/PM and a UTC offset.

    Args:
        value: Normalized non-empty date text.

    Returns:
        list[str]: Candidate strings in priority order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    candidates = [value]
    for position, character in enumerate(value):
        if character not in ("T", " "):
            continue
        date_part = value[:position].rstrip()
        if date_part and _DOMAIN_TIME_SUFFIX_PATTERN.match(value[position + 1 :].strip()):
            candidates.append(date_part)
    return candidates
