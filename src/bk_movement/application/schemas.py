"""Pydantic schemas for bk_movement API."""

from pydantic import BaseModel, Field

from src.bk_common.cents import cents_to_display
from src.bk_common.datetime_utils import to_iso
from src.bk_common.enums import MovementType
from src.bk_movement.domain.models import MovementView

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class MovementCreateRequest(BaseModel):
    account_id: int = Field(..., gt=0)
    movement_type: MovementType
    amount_cents: int = Field(..., gt=0, description="Movement amount in cents")


class MovementUpdateRequest(BaseModel):
    movement_type: MovementType
    amount_cents: int = Field(..., gt=0, description="New movement amount in cents")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class MovementResponse(BaseModel):
    movement_id: int
    account_id: int
    account_number: str | None
    movement_type: MovementType
    amount_cents: int
    amount_display: str
    balance_cents: int
    balance_display: str
    movement_date: str | None  # ISO8601 string

    @classmethod
    def from_view(cls, view: MovementView) -> "MovementResponse":
        m = view.movement
        return cls(
            movement_id=m.id,
            account_id=m.account_id,
            account_number=view.account_number,
            movement_type=m.movement_type,
            amount_cents=m.amount,
            amount_display=cents_to_display(m.amount),
            balance_cents=m.balance,
            balance_display=cents_to_display(m.balance),
            movement_date=to_iso(m.movement_date),
        )
