"""002: create accounts table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE accounts (
            id                  BIGSERIAL   PRIMARY KEY,
            account_number      VARCHAR(12) NOT NULL,
            account_type        VARCHAR(20) NOT NULL,
            initial_balance     BIGINT      NOT NULL DEFAULT 0,
            current_balance     BIGINT      NOT NULL DEFAULT 0,
            status              VARCHAR(20) NOT NULL DEFAULT 'ACTIVE',
            customer_id         BIGINT      NOT NULL,
            version             BIGINT      NOT NULL DEFAULT 0,
            created_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_accounts_account_number   UNIQUE (account_number),
            CONSTRAINT ck_accounts_number_digits    CHECK (account_number ~ '^[0-9]{6,12}$'),
            CONSTRAINT ck_accounts_type             CHECK (account_type IN ('SAVINGS', 'CHECKING')),
            CONSTRAINT ck_accounts_status           CHECK (status IN ('ACTIVE', 'INACTIVE')),
            CONSTRAINT ck_accounts_initial_gte_0    CHECK (initial_balance >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_accounts_customer_id ON accounts (customer_id);")
    op.execute("""
        CREATE TRIGGER trg_accounts_updated_at
            BEFORE UPDATE ON accounts
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON TABLE accounts IS 'Customer bank accounts; all amounts in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS accounts CASCADE;")
