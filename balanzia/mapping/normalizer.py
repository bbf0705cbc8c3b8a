"""Row normalizer converting mapped raw strings into canonical typed values."""

from __future__ import annotations

from dataclasses import dataclass

from balanzia.config import DEFAULT_INGESTION_DATE_FORMATS
from balanzia.domain import (
    CanonicalTransaction,
    InvalidAmountError,
    InvalidDateError,
    MissingFieldError,
    TransactionStatus,
    domain_normalize_optional_text,
    domain_parse_amount,
    domain_parse_transaction_date,
)

from .interfaces import CANONICAL_FIELD_ACCOUNT, CANONICAL_FIELD_AMOUNT, CANONICAL_FIELD_DATE, CANONICAL_FIELD_MERCHANT, MappedRow


@dataclass(frozen=True)
class NormalizerConfig:
    """Configuration for canonical row normalization.

    Attributes:
        default_account_label: Account applied when a row carries none.
        date_formats: Ordered accepted date formats.
    """

    default_account_label: str = "Default"
    date_formats: tuple[str, ...] = DEFAULT_INGESTION_DATE_FORMATS

    def mapping_validate(self) -> None:
        """Validate normalizer configuration values.

        Returns:
            None: This method does not return a value.

        Raises:
            ValueError: Raised when configured defaults are invalid.
        """

        if not self.default_account_label.strip():
            raise ValueError("config.default_account_label must not be blank")
        if not self.date_formats:
            raise ValueError("config.date_formats must not be empty")


class TransactionNormalizer:
    """Concrete normalizer producing canonical transactions from mapped rows."""

    def __init__(self, config: NormalizerConfig | None = None):
        """Initialize row normalizer.

        Args:
            config: Optional normalizer configuration values.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when config values are invalid.
        """

        resolved_config = config or NormalizerConfig()
        resolved_config.mapping_validate()

        self._config = resolved_config

    def mapping_normalize_row(self, mapped_row: MappedRow) -> CanonicalTransaction:
        """Normalize one mapped row into an unhashed canonical transaction.

        Args:
            mapped_row: Canonical field projection of one upload row.

        Returns:
            CanonicalTransaction: Typed transaction with empty cost center,
                `Review Required` status and no identity hash yet.

        Raises:
            MissingFieldError: Raised when merchant is blank after trimming.
            InvalidDateError: Raised when date matches no accepted format.
            InvalidAmountError: Raised when amount is not a finite decimal.
        """

        raw_date = mapped_row.fields.get(CANONICAL_FIELD_DATE) or ""
        transaction_date = domain_parse_transaction_date(raw_date, self._config.date_formats)
        if transaction_date is None:
            raise InvalidDateError(raw_date)

        raw_amount = mapped_row.fields.get(CANONICAL_FIELD_AMOUNT) or ""
        amount = domain_parse_amount(raw_amount)
        if amount is None:
            raise InvalidAmountError(raw_amount)

        merchant = domain_normalize_optional_text(mapped_row.fields.get(CANONICAL_FIELD_MERCHANT))
        if merchant is None:
            raise MissingFieldError(CANONICAL_FIELD_MERCHANT)

        account = domain_normalize_optional_text(mapped_row.fields.get(CANONICAL_FIELD_ACCOUNT))

        return CanonicalTransaction(
            transaction_date=transaction_date,
            merchant=merchant,
            amount=amount,
            account=account or self._config.default_account_label,
            cost_center=None,
            status=TransactionStatus.REVIEW_REQUIRED,
        )
