"""Pydantic schemas for bk_account API."""

from pydantic import BaseModel, Field, field_validator

from src.bk_account.domain.models import Account, AccountPatch
from src.bk_common.cents import cents_to_display
from src.bk_common.datetime_utils import to_iso
from src.bk_common.enums import AccountStatus, AccountType

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AccountCreateRequest(BaseModel):
    account_number: str = Field(
        ..., pattern=r"^\d{6,12}$", description="Account number, 6 to 12 digits"
    )
    account_type: AccountType
    initial_balance_cents: int = Field(..., ge=0, description="Opening balance in cents")
    status: AccountStatus = AccountStatus.ACTIVE
    customer_id: int = Field(..., gt=0)

    def to_domain(self) -> Account:
        return Account(
            id=0,
            account_number=self.account_number,
            account_type=self.account_type,
            initial_balance=self.initial_balance_cents,
            current_balance=self.initial_balance_cents,
            customer_id=self.customer_id,
            status=self.status,
        )


class AccountUpdateRequest(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    account_type: AccountType | None = None
    status: AccountStatus | None = None

    @field_validator("account_type", "status", mode="before")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    def to_patch(self) -> AccountPatch:
        return AccountPatch(**{name: getattr(self, name) for name in self.model_fields_set})


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AccountResponse(BaseModel):
    account_id: int
    account_number: str
    account_type: AccountType
    initial_balance_cents: int
    initial_balance_display: str
    current_balance_cents: int
    current_balance_display: str
    status: AccountStatus
    customer_id: int
    created_at: str | None
    updated_at: str | None

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls(
            account_id=account.id,
            account_number=account.account_number,
            account_type=account.account_type,
            initial_balance_cents=account.initial_balance,
            initial_balance_display=cents_to_display(account.initial_balance),
            current_balance_cents=account.current_balance,
            current_balance_display=cents_to_display(account.current_balance),
            status=account.status,
            customer_id=account.customer_id,
            created_at=to_iso(account.created_at),
            updated_at=to_iso(account.updated_at),
        )
