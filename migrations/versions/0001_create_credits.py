"""create credits and credit_payments

Revision ID: 0001_create_credits
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_create_credits"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "credits",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("client_name", sa.String(length=128), nullable=False),
        sa.Column("client_last_name", sa.String(length=128), nullable=False),
        sa.Column("id_number", sa.String(length=64), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=False),
        sa.Column("address", sa.String(length=256), nullable=False),
        sa.Column("total_amount", sa.Numeric(24, 2), nullable=False),
        sa.Column("detailed_info", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
    )
    op.create_index("ix_credits_position", "credits", ["position"])
    op.create_index("ix_credits_id_number", "credits", ["id_number"])
    op.create_index("ix_credits_date", "credits", ["date"])

    op.create_table(
        "credit_payments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "credit_id",
            sa.String(length=36),
            sa.ForeignKey("credits.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(24, 2), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("payment_method", sa.String(length=16), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_credit_payments_credit_id", "credit_payments", ["credit_id"])


def downgrade() -> None:
    op.drop_index("ix_credit_payments_credit_id", table_name="credit_payments")
    op.drop_table("credit_payments")
    op.drop_index("ix_credits_date", table_name="credits")
    op.drop_index("ix_credits_id_number", table_name="credits")
    op.drop_index("ix_credits_position", table_name="credits")
    op.drop_table("credits")
