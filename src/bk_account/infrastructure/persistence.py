"""AccountRepository — concrete implementation of AccountRepositoryProtocol.

Raw SQL via `text()` with RETURNING, one round trip per operation.

Transaction ownership: The CALLER (application service or MovementProcessor) is
responsible for committing or rolling back. Balance writes are only issued
after the caller has loaded the row with `for_update=True`.
"""

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_account.domain.models import Account, AccountPatch
from src.bk_common.enums import AccountStatus, AccountType
from src.bk_common.errors import AccountAlreadyExistsError, AccountNotFoundError

_COLUMNS = """id, account_number, account_type, initial_balance, current_balance,
              status, customer_id, version, created_at, updated_at"""

_INSERT_SQL = text(f"""
    INSERT INTO accounts
        (account_number, account_type, initial_balance, current_balance,
         status, customer_id)
    VALUES
        (:account_number, :account_type, :initial_balance, :initial_balance,
         :status, :customer_id)
    RETURNING {_COLUMNS}
""")

_GET_BY_ID_SQL = text(f"SELECT {_COLUMNS} FROM accounts WHERE id = :id")

_GET_BY_ID_FOR_UPDATE_SQL = text(f"SELECT {_COLUMNS} FROM accounts WHERE id = :id FOR UPDATE")

_GET_BY_NUMBER_SQL = text(f"SELECT {_COLUMNS} FROM accounts WHERE account_number = :number")

_EXISTS_BY_NUMBER_SQL = text(
    "SELECT EXISTS (SELECT 1 FROM accounts WHERE account_number = :number)"
)

_LIST_BY_CUSTOMER_SQL = text(f"""
    SELECT {_COLUMNS} FROM accounts
    WHERE customer_id = :customer_id
    ORDER BY id
""")

_LIST_ALL_SQL = text(f"SELECT {_COLUMNS} FROM accounts ORDER BY id")

_UPDATE_BALANCE_SQL = text(f"""
    UPDATE accounts
    SET current_balance = :balance,
        version = version + 1,
        updated_at = NOW()
    WHERE id = :id
    RETURNING {_COLUMNS}
""")

_DEACTIVATE_SQL = text(f"""
    UPDATE accounts
    SET status = :status,
        updated_at = NOW()
    WHERE id = :id
    RETURNING {_COLUMNS}
""")

# Only these columns may be patched; number, customer and initial balance never change.
_PATCHABLE_COLUMNS = ("account_type", "status")


def _row_to_account(row: object) -> Account:
    return Account(
        id=row.id,  # type: ignore[attr-defined]
        account_number=row.account_number,  # type: ignore[attr-defined]
        account_type=AccountType(row.account_type),  # type: ignore[attr-defined]
        initial_balance=row.initial_balance,  # type: ignore[attr-defined]
        current_balance=row.current_balance,  # type: ignore[attr-defined]
        status=AccountStatus(row.status),  # type: ignore[attr-defined]
        customer_id=row.customer_id,  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository — one SQL statement per operation."""

    async def create(self, db: AsyncSession, account: Account) -> Account:
        try:
            result = await db.execute(
                _INSERT_SQL,
                {
                    "account_number": account.account_number,
                    "account_type": account.account_type.value,
                    "initial_balance": account.initial_balance,
                    "status": account.status.value,
                    "customer_id": account.customer_id,
                },
            )
        except IntegrityError as exc:
            # uq_accounts_account_number lost a race with a concurrent insert
            raise AccountAlreadyExistsError(account.account_number) from exc
        return _row_to_account(result.fetchone())

    async def get_by_id(
        self, db: AsyncSession, account_id: int, for_update: bool = False
    ) -> Account | None:
        sql = _GET_BY_ID_FOR_UPDATE_SQL if for_update else _GET_BY_ID_SQL
        result = await db.execute(sql, {"id": account_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def get_by_number(
        self, db: AsyncSession, account_number: str
    ) -> Account | None:
        result = await db.execute(_GET_BY_NUMBER_SQL, {"number": account_number})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def exists_by_number(self, db: AsyncSession, account_number: str) -> bool:
        result = await db.execute(_EXISTS_BY_NUMBER_SQL, {"number": account_number})
        return bool(result.scalar_one())

    async def list_by_customer(self, db: AsyncSession, customer_id: int) -> list[Account]:
        result = await db.execute(_LIST_BY_CUSTOMER_SQL, {"customer_id": customer_id})
        return [_row_to_account(row) for row in result.fetchall()]

    async def list_all(self, db: AsyncSession) -> list[Account]:
        result = await db.execute(_LIST_ALL_SQL)
        return [_row_to_account(row) for row in result.fetchall()]

    async def update_balance(
        self, db: AsyncSession, account_id: int, new_balance: int
    ) -> Account:
        result = await db.execute(
            _UPDATE_BALANCE_SQL, {"id": account_id, "balance": new_balance}
        )
        row = result.fetchone()
        if row is None:
            raise AccountNotFoundError(account_id)
        return _row_to_account(row)

    async def update(
        self, db: AsyncSession, account_id: int, patch: AccountPatch
    ) -> Account | None:
        changes = {
            col: value.value for col, value in patch.provided().items()
            if col in _PATCHABLE_COLUMNS
        }
        if not changes:
            return await self.get_by_id(db, account_id)
        assignments = ", ".join(f"{col} = :{col}" for col in changes)
        sql = text(f"""
            UPDATE accounts
            SET {assignments},
                updated_at = NOW()
            WHERE id = :id
            RETURNING {_COLUMNS}
        """)
        result = await db.execute(sql, {"id": account_id, **changes})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def deactivate(self, db: AsyncSession, account_id: int) -> Account | None:
        result = await db.execute(
            _DEACTIVATE_SQL, {"id": account_id, "status": AccountStatus.INACTIVE.value}
        )
        row = result.fetchone()
        return _row_to_account(row) if row else None
