"""Event payloads broadcast on the Redis event channels.

Serialized with pydantic `model_dump_json`; amounts are cents.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.bk_common.datetime_utils import utc_now
from src.bk_common.enums import (
    AccountEventType,
    AccountStatus,
    AccountType,
    CustomerEventType,
    MovementEventType,
    MovementType,
)


class MovementEvent(BaseModel):
    event_type: MovementEventType
    movement_id: int
    account_id: int
    account_number: str | None = None
    movement_type: MovementType
    amount: int
    balance_before: int
    balance_after: int
    customer_id: int | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class AccountEvent(BaseModel):
    event_type: AccountEventType
    account_id: int
    account_number: str
    account_type: AccountType | None = None
    current_balance: int | None = None
    customer_id: int | None = None
    status: AccountStatus | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class CustomerEvent(BaseModel):
    """Inbound event published by the customer service."""

    event_type: str
    customer_id: int
    customer_name: str | None = None
    identification: str | None = None
    status: bool | None = None
    timestamp: datetime | None = None

    @property
    def known_type(self) -> CustomerEventType | None:
        try:
            return CustomerEventType(self.event_type)
        except ValueError:
            return None
