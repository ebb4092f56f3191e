"""Domain models for bk_movement — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.bk_common.enums import MovementType


@dataclass
class Movement:
    id: int                          # BIGSERIAL, 0 until inserted
    account_id: int
    movement_type: MovementType
    amount: int                      # cents, always > 0
    balance: int                     # cents, account balance right after this movement
    movement_date: datetime | None = None
    created_at: datetime | None = None


@dataclass
class MovementView:
    """Read projection: a movement plus its owning account's number."""

    movement: Movement
    account_number: str | None
