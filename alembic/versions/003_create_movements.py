"""003: create movements table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE movements (
            id              BIGSERIAL   PRIMARY KEY,
            account_id      BIGINT      NOT NULL REFERENCES accounts(id),
            movement_type   VARCHAR(10) NOT NULL,
            amount          BIGINT      NOT NULL,
            balance         BIGINT      NOT NULL,
            movement_date   TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_movements_type        CHECK (movement_type IN ('CREDIT', 'DEBIT')),
            CONSTRAINT ck_movements_amount_gt_0 CHECK (amount > 0)
        );
    """)
    op.execute("CREATE INDEX idx_movements_account_id ON movements (account_id);")
    op.execute(
        "CREATE INDEX idx_movements_account_date ON movements (account_id, movement_date DESC);"
    )
    op.execute(
        "COMMENT ON COLUMN movements.balance IS 'Account balance right after this movement (cents)';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS movements CASCADE;")
