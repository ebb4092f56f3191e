"""Pydantic schemas for the account statement report."""

from pydantic import BaseModel

from src.bk_account.domain.models import Account
from src.bk_common.cents import cents_to_display
from src.bk_common.datetime_utils import to_iso
from src.bk_common.enums import AccountStatus, AccountType, MovementType
from src.bk_movement.domain.models import Movement


class MovementDetail(BaseModel):
    movement_id: int
    movement_date: str | None
    movement_type: MovementType
    amount_cents: int
    amount_display: str
    balance_cents: int
    balance_display: str

    @classmethod
    def from_domain(cls, movement: Movement) -> "MovementDetail":
        return cls(
            movement_id=movement.id,
            movement_date=to_iso(movement.movement_date),
            movement_type=movement.movement_type,
            amount_cents=movement.amount,
            amount_display=cents_to_display(movement.amount),
            balance_cents=movement.balance,
            balance_display=cents_to_display(movement.balance),
        )


class AccountStatementResponse(BaseModel):
    customer_name: str | None
    account_number: str
    account_type: AccountType
    initial_balance_cents: int
    current_balance_cents: int
    current_balance_display: str
    status: AccountStatus
    movements: list[MovementDetail]

    @classmethod
    def build(
        cls, customer_name: str | None, account: Account, movements: list[Movement]
    ) -> "AccountStatementResponse":
        return cls(
            customer_name=customer_name,
            account_number=account.account_number,
            account_type=account.account_type,
            initial_balance_cents=account.initial_balance,
            current_balance_cents=account.current_balance,
            current_balance_display=cents_to_display(account.current_balance),
            status=account.status,
            movements=[MovementDetail.from_domain(m) for m in movements],
        )
