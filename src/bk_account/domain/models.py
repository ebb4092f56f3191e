"""Domain models for bk_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from src.bk_common.enums import AccountStatus, AccountType


class _Unset:
    """Marker for patch fields the caller did not provide."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class Account:
    id: int                          # BIGSERIAL, 0 until inserted
    account_number: str              # 6-12 digits, unique
    account_type: AccountType
    initial_balance: int             # cents, >= 0, immutable after create
    current_balance: int             # cents, written only by MovementProcessor
    customer_id: int
    status: AccountStatus = AccountStatus.ACTIVE
    version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE


@dataclass
class AccountPatch:
    """Partial account update. Fields left as UNSET are not touched.

    Account number, customer and initial balance are deliberately absent:
    they never change after creation.
    """

    account_type: AccountType = UNSET
    status: AccountStatus = UNSET

    def provided(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.provided()


@dataclass
class CustomerInfo:
    """Subset of the customer service payload the account service relies on."""

    customer_id: int
    name: str | None
    active: bool
