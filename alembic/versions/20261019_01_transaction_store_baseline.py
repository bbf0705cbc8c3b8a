"""Transaction store baseline

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create transaction and mapping template tables."""

    op.create_table(
        "transaction_record",
        sa.Column("transaction_id", sa.BigInteger(), sa.Identity(always=False), primary_key=True),
        sa.Column("transaction_date", sa.Date(), nullable=False),
        sa.Column("merchant", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(), nullable=False),
        sa.Column("account", sa.Text(), nullable=False),
        sa.Column("cost_center", sa.Text(), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'Review Required'")),
        sa.Column("identity_hash", sa.Text(), nullable=False),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.UniqueConstraint("identity_hash", name="uq_transaction_record_identity_hash"),
        sa.CheckConstraint(
            "status in ('Processed', 'Review Required')",
            name="ck_transaction_record_status",
        ),
        sa.CheckConstraint(
            "(cost_center IS NULL AND status = 'Review Required') "
            "OR (cost_center IS NOT NULL AND status = 'Processed')",
            name="ck_transaction_record_status_matches_cost_center",
        ),
    )
    op.create_index("ix_transaction_record_transaction_date", "transaction_record", ["transaction_date"])
    op.create_index("ix_transaction_record_account", "transaction_record", ["account"])

    op.create_table(
        "mapping_template",
        sa.Column("mapping_template_id", sa.BigInteger(), sa.Identity(always=False), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("file_kind", sa.Text(), nullable=False, server_default=sa.text("'delimited_text'")),
        sa.Column("field_aliases", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.UniqueConstraint("name", name="uq_mapping_template_name"),
    )


def downgrade() -> None:
    """Drop transaction and mapping template tables."""

    op.drop_table("mapping_template")
    op.drop_index("ix_transaction_record_account", table_name="transaction_record")
    op.drop_index("ix_transaction_record_transaction_date", table_name="transaction_record")
    op.drop_table("transaction_record")
