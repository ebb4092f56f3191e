"""AccountApplicationService — account lifecycle over the AccountStore.

Writes (create, update, deactivate) run inside `transaction(db)` and publish
their lifecycle event only after the commit. Reads run without an explicit
transaction. The current balance is never written here: that belongs to
MovementProcessor.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_account.application.schemas import AccountResponse
from src.bk_account.domain.models import Account, AccountPatch
from src.bk_account.domain.repository import (
    AccountRepositoryProtocol,
    CustomerValidatorProtocol,
)
from src.bk_account.infrastructure.customer_client import CustomerClient
from src.bk_account.infrastructure.persistence import AccountRepository
from src.bk_common.boundary import error_boundary, transaction
from src.bk_common.enums import AccountEventType
from src.bk_common.errors import AccountAlreadyExistsError, AccountNotFoundError
from src.bk_messaging.domain.events import AccountEvent
from src.bk_messaging.domain.sink import EventSinkProtocol
from src.bk_messaging.infrastructure.publisher import RedisEventPublisher

logger = logging.getLogger(__name__)


def _account_event(event_type: AccountEventType, account: Account) -> AccountEvent:
    return AccountEvent(
        event_type=event_type,
        account_id=account.id,
        account_number=account.account_number,
        account_type=account.account_type,
        current_balance=account.current_balance,
        customer_id=account.customer_id,
        status=account.status,
    )


class AccountApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        customer_validator: CustomerValidatorProtocol | None = None,
        event_sink: EventSinkProtocol | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._customers: CustomerValidatorProtocol = customer_validator or CustomerClient()
        self._events: EventSinkProtocol = event_sink or RedisEventPublisher()

    @error_boundary("create account")
    async def create_account(self, db: AsyncSession, account: Account) -> AccountResponse:
        logger.info("Creating new account for customer: %s", account.customer_id)
        # Remote check first: nothing is written unless the owner is valid
        await self._customers.validate_customer(account.customer_id)

        async with transaction(db):
            if await self._repo.exists_by_number(db, account.account_number):
                raise AccountAlreadyExistsError(account.account_number)
            created = await self._repo.create(db, account)

        logger.info("Account created successfully: %s", created.account_number)
        await self._publish(_account_event(AccountEventType.ACCOUNT_CREATED, created))
        return AccountResponse.from_domain(created)

    @error_boundary("get account")
    async def get_account(self, db: AsyncSession, account_id: int) -> AccountResponse:
        account = await self._repo.get_by_id(db, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return AccountResponse.from_domain(account)

    @error_boundary("get account by number")
    async def get_account_by_number(
        self, db: AsyncSession, account_number: str
    ) -> AccountResponse:
        account = await self._repo.get_by_number(db, account_number)
        if account is None:
            raise AccountNotFoundError(account_number, by_number=True)
        return AccountResponse.from_domain(account)

    @error_boundary("list customer accounts")
    async def list_by_customer(
        self, db: AsyncSession, customer_id: int
    ) -> list[AccountResponse]:
        accounts = await self._repo.list_by_customer(db, customer_id)
        return [AccountResponse.from_domain(a) for a in accounts]

    @error_boundary("list accounts")
    async def list_all(self, db: AsyncSession) -> list[AccountResponse]:
        accounts = await self._repo.list_all(db)
        return [AccountResponse.from_domain(a) for a in accounts]

    @error_boundary("update account")
    async def update_account(
        self, db: AsyncSession, account_id: int, patch: AccountPatch
    ) -> AccountResponse:
        logger.info("Updating account %s with %s", account_id, patch.provided())
        async with transaction(db):
            updated = await self._repo.update(db, account_id, patch)
            if updated is None:
                raise AccountNotFoundError(account_id)

        if not patch.is_empty():
            await self._publish(_account_event(AccountEventType.ACCOUNT_UPDATED, updated))
        return AccountResponse.from_domain(updated)

    @error_boundary("deactivate account")
    async def deactivate_account(self, db: AsyncSession, account_id: int) -> None:
        logger.info("Deactivating account with ID: %s", account_id)
        async with transaction(db):
            account = await self._repo.deactivate(db, account_id)
            if account is None:
                raise AccountNotFoundError(account_id)

        await self._publish(_account_event(AccountEventType.ACCOUNT_DELETED, account))

    async def _publish(self, event: AccountEvent) -> None:
        try:
            await self._events.publish_account_event(event)
        except Exception:
            logger.exception(
                "Event sink failed for %s on account %s",
                event.event_type.value,
                event.account_number,
            )
