"""Repository Protocols — dependency inversion for testability.

Unit tests inject fakes or mocks that conform to these Protocols.
Infrastructure layer provides the real implementations.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_account.domain.models import Account, AccountPatch, CustomerInfo


class AccountRepositoryProtocol(Protocol):
    async def create(self, db: AsyncSession, account: Account) -> Account: ...

    async def get_by_id(
        self, db: AsyncSession, account_id: int, for_update: bool = False
    ) -> Account | None: ...

    async def get_by_number(
        self, db: AsyncSession, account_number: str
    ) -> Account | None: ...

    async def exists_by_number(self, db: AsyncSession, account_number: str) -> bool: ...

    async def list_by_customer(self, db: AsyncSession, customer_id: int) -> list[Account]: ...

    async def list_all(self, db: AsyncSession) -> list[Account]: ...

    async def update_balance(
        self, db: AsyncSession, account_id: int, new_balance: int
    ) -> Account: ...

    async def update(
        self, db: AsyncSession, account_id: int, patch: AccountPatch
    ) -> Account | None: ...

    async def deactivate(self, db: AsyncSession, account_id: int) -> Account | None: ...


class CustomerValidatorProtocol(Protocol):
    async def validate_customer(self, customer_id: int) -> bool: ...

    async def get_customer(self, customer_id: int) -> CustomerInfo: ...
