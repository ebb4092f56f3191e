"""MovementRepository — concrete implementation of MovementRepositoryProtocol.

Plain CRUD keyed by movement id and account id. Balance arithmetic lives in
the domain layer; this module only stores what it is given.

Transaction ownership: The CALLER (MovementProcessor) commits or rolls back.
"""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.enums import MovementType
from src.bk_common.errors import MovementNotFoundError
from src.bk_movement.domain.models import Movement

_COLUMNS = "id, account_id, movement_type, amount, balance, movement_date, created_at"

_INSERT_SQL = text(f"""
    INSERT INTO movements (account_id, movement_type, amount, balance, movement_date)
    VALUES (:account_id, :movement_type, :amount, :balance, :movement_date)
    RETURNING {_COLUMNS}
""")

_UPDATE_SQL = text(f"""
    UPDATE movements
    SET movement_type = :movement_type,
        amount = :amount,
        balance = :balance
    WHERE id = :id
    RETURNING {_COLUMNS}
""")

_DELETE_SQL = text("DELETE FROM movements WHERE id = :id")

_GET_BY_ID_SQL = text(f"SELECT {_COLUMNS} FROM movements WHERE id = :id")

_LIST_BY_ACCOUNT_SQL = text(f"""
    SELECT {_COLUMNS} FROM movements
    WHERE account_id = :account_id
    ORDER BY movement_date DESC, id DESC
""")

_LIST_ALL_SQL = text(f"SELECT {_COLUMNS} FROM movements ORDER BY movement_date DESC, id DESC")

_LIST_BY_ACCOUNT_RANGE_SQL = text(f"""
    SELECT {_COLUMNS} FROM movements
    WHERE account_id = :account_id
      AND movement_date BETWEEN :start AND :end
    ORDER BY movement_date DESC, id DESC
""")

_LIST_BY_CUSTOMER_RANGE_SQL = text("""
    SELECT m.id, m.account_id, m.movement_type, m.amount, m.balance,
           m.movement_date, m.created_at
    FROM movements m
    INNER JOIN accounts a ON m.account_id = a.id
    WHERE a.customer_id = :customer_id
      AND m.movement_date BETWEEN :start AND :end
    ORDER BY m.movement_date DESC, m.id DESC
""")


def _row_to_movement(row: object) -> Movement:
    return Movement(
        id=row.id,  # type: ignore[attr-defined]
        account_id=row.account_id,  # type: ignore[attr-defined]
        movement_type=MovementType(row.movement_type),  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        movement_date=row.movement_date,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class MovementRepository:
    async def create(self, db: AsyncSession, movement: Movement) -> Movement:
        result = await db.execute(
            _INSERT_SQL,
            {
                "account_id": movement.account_id,
                "movement_type": movement.movement_type.value,
                "amount": movement.amount,
                "balance": movement.balance,
                "movement_date": movement.movement_date,
            },
        )
        return _row_to_movement(result.fetchone())

    async def update(self, db: AsyncSession, movement: Movement) -> Movement:
        result = await db.execute(
            _UPDATE_SQL,
            {
                "id": movement.id,
                "movement_type": movement.movement_type.value,
                "amount": movement.amount,
                "balance": movement.balance,
            },
        )
        row = result.fetchone()
        if row is None:
            raise MovementNotFoundError(movement.id)
        return _row_to_movement(row)

    async def delete(self, db: AsyncSession, movement_id: int) -> None:
        result = await db.execute(_DELETE_SQL, {"id": movement_id})
        if result.rowcount == 0:
            raise MovementNotFoundError(movement_id)

    async def get_by_id(self, db: AsyncSession, movement_id: int) -> Movement | None:
        result = await db.execute(_GET_BY_ID_SQL, {"id": movement_id})
        row = result.fetchone()
        return _row_to_movement(row) if row else None

    async def list_by_account(self, db: AsyncSession, account_id: int) -> list[Movement]:
        result = await db.execute(_LIST_BY_ACCOUNT_SQL, {"account_id": account_id})
        return [_row_to_movement(row) for row in result.fetchall()]

    async def list_all(self, db: AsyncSession) -> list[Movement]:
        result = await db.execute(_LIST_ALL_SQL)
        return [_row_to_movement(row) for row in result.fetchall()]

    async def list_by_account_date_range(
        self, db: AsyncSession, account_id: int, start: datetime, end: datetime
    ) -> list[Movement]:
        result = await db.execute(
            _LIST_BY_ACCOUNT_RANGE_SQL, {"account_id": account_id, "start": start, "end": end}
        )
        return [_row_to_movement(row) for row in result.fetchall()]

    async def list_by_customer_date_range(
        self, db: AsyncSession, customer_id: int, start: datetime, end: datetime
    ) -> list[Movement]:
        result = await db.execute(
            _LIST_BY_CUSTOMER_RANGE_SQL,
            {"customer_id": customer_id, "start": start, "end": end},
        )
        return [_row_to_movement(row) for row in result.fetchall()]
