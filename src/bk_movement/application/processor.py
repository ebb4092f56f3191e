"""MovementProcessor — the only writer of an account's current balance.

Every create/update/delete runs read-account → compute → write movement →
write account as one unit of work:

  * an asyncio.Lock per account id serializes the span inside this process;
    entries live only while some task holds or awaits them;
  * the account row is loaded with SELECT ... FOR UPDATE, so other worker
    processes queue on the row lock for the rest of the transaction. Update
    and delete read the movement again only after that lock is held;
  * `transaction(db)` commits both writes together or rolls both back,
    cancellation included.

Update and delete revert the movement's effect against the account's
*current* balance. That is exact for the most recent movement; for older
movements the later snapshots in `movements.balance` are left as they were,
and removing a credit that later debits spent leaves the balance negative.

Events are published after commit and can never fail the operation.
"""

import asyncio
import dataclasses
import logging
import weakref
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_account.domain.models import Account
from src.bk_account.domain.repository import AccountRepositoryProtocol
from src.bk_account.infrastructure.persistence import AccountRepository
from src.bk_common.boundary import error_boundary, transaction
from src.bk_common.datetime_utils import as_utc, utc_now
from src.bk_common.enums import MovementEventType, MovementType
from src.bk_common.errors import (
    AccountNotFoundError,
    InvalidDateRangeError,
    MovementNotFoundError,
)
from src.bk_messaging.domain.events import MovementEvent
from src.bk_messaging.domain.sink import EventSinkProtocol
from src.bk_messaging.infrastructure.publisher import RedisEventPublisher
from src.bk_movement.domain.balance import (
    apply_movement,
    parse_movement_type,
    revert_balance,
    validate_amount,
)
from src.bk_movement.domain.models import Movement, MovementView
from src.bk_movement.domain.repository import MovementRepositoryProtocol
from src.bk_movement.infrastructure.persistence import MovementRepository

logger = logging.getLogger(__name__)


class MovementProcessor:
    def __init__(
        self,
        account_repo: AccountRepositoryProtocol | None = None,
        movement_repo: MovementRepositoryProtocol | None = None,
        event_sink: EventSinkProtocol | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._movements: MovementRepositoryProtocol = movement_repo or MovementRepository()
        self._events: EventSinkProtocol = event_sink or RedisEventPublisher()
        self._account_locks: weakref.WeakValueDictionary[int, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _get_or_create_lock(self, account_id: int) -> asyncio.Lock:
        lock = self._account_locks.get(account_id)
        if lock is None:
            lock = asyncio.Lock()
            self._account_locks[account_id] = lock
        return lock

    async def _lock_account(self, db: AsyncSession, account_id: int) -> Account:
        account = await self._accounts.get_by_id(db, account_id, for_update=True)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def _find_movement(self, db: AsyncSession, movement_id: int) -> Movement:
        movement = await self._movements.get_by_id(db, movement_id)
        if movement is None:
            raise MovementNotFoundError(movement_id)
        return movement

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @error_boundary("create movement")
    async def create_movement(
        self,
        db: AsyncSession,
        account_id: int,
        movement_type: MovementType | str,
        amount: int,
    ) -> MovementView:
        validate_amount(amount)
        mtype = parse_movement_type(movement_type)
        logger.info(
            "Creating movement for account: %s, type: %s, amount: %d",
            account_id, mtype.value, amount,
        )

        async with self._get_or_create_lock(account_id):
            async with transaction(db):
                account = await self._lock_account(db, account_id)
                new_balance = apply_movement(account.current_balance, amount, mtype)
                saved = await self._movements.create(
                    db,
                    Movement(
                        id=0,
                        account_id=account.id,
                        movement_type=mtype,
                        amount=amount,
                        balance=new_balance,
                        movement_date=utc_now(),
                    ),
                )
                await self._accounts.update_balance(db, account.id, new_balance)

        logger.info("Movement created successfully: %s", saved.id)
        await self._publish(
            MovementEventType.MOVEMENT_CREATED, saved, account, account.current_balance
        )
        return MovementView(movement=saved, account_number=account.account_number)

    @error_boundary("update movement")
    async def update_movement(
        self,
        db: AsyncSession,
        movement_id: int,
        movement_type: MovementType | str,
        amount: int,
    ) -> MovementView:
        validate_amount(amount)
        mtype = parse_movement_type(movement_type)
        logger.info("Updating movement with ID: %s", movement_id)

        existing = await self._find_movement(db, movement_id)
        async with self._get_or_create_lock(existing.account_id):
            async with transaction(db):
                account = await self._lock_account(db, existing.account_id)
                # A concurrent update/delete may have committed before the row lock
                movement = await self._find_movement(db, movement_id)
                reverted = revert_balance(
                    account.current_balance, movement.amount, movement.movement_type
                )
                new_balance = apply_movement(reverted, amount, mtype)
                saved = await self._movements.update(
                    db,
                    dataclasses.replace(
                        movement, movement_type=mtype, amount=amount, balance=new_balance
                    ),
                )
                await self._accounts.update_balance(db, account.id, new_balance)

        logger.info("Movement updated successfully: %s", saved.id)
        await self._publish(
            MovementEventType.MOVEMENT_UPDATED, saved, account, account.current_balance
        )
        return MovementView(movement=saved, account_number=account.account_number)

    @error_boundary("delete movement")
    async def delete_movement(self, db: AsyncSession, movement_id: int) -> None:
        logger.info("Deleting movement with ID: %s", movement_id)

        existing = await self._find_movement(db, movement_id)
        async with self._get_or_create_lock(existing.account_id):
            async with transaction(db):
                account = await self._lock_account(db, existing.account_id)
                movement = await self._find_movement(db, movement_id)
                reverted = revert_balance(
                    account.current_balance, movement.amount, movement.movement_type
                )
                await self._accounts.update_balance(db, account.id, reverted)
                await self._movements.delete(db, movement_id)

        logger.info("Movement deleted successfully: %s", movement_id)
        await self._publish(
            MovementEventType.MOVEMENT_DELETED,
            dataclasses.replace(movement, balance=reverted),
            account,
            account.current_balance,
        )

    # ------------------------------------------------------------------
    # Reads: no balance recomputation
    # ------------------------------------------------------------------

    @error_boundary("get movement")
    async def get_movement(self, db: AsyncSession, movement_id: int) -> MovementView:
        movement = await self._find_movement(db, movement_id)
        return (await self._enrich(db, [movement]))[0]

    @error_boundary("list account movements")
    async def list_by_account(self, db: AsyncSession, account_id: int) -> list[MovementView]:
        movements = await self._movements.list_by_account(db, account_id)
        return await self._enrich(db, movements)

    @error_boundary("list movements")
    async def list_all(self, db: AsyncSession) -> list[MovementView]:
        movements = await self._movements.list_all(db)
        return await self._enrich(db, movements)

    @error_boundary("list customer movements")
    async def list_by_customer_date_range(
        self, db: AsyncSession, customer_id: int, start: datetime, end: datetime
    ) -> list[MovementView]:
        start, end = as_utc(start), as_utc(end)
        if start > end:
            raise InvalidDateRangeError(start, end)
        logger.info(
            "Fetching movements for customer: %s between %s and %s", customer_id, start, end
        )
        movements = await self._movements.list_by_customer_date_range(
            db, customer_id, start, end
        )
        return await self._enrich(db, movements)

    async def _enrich(self, db: AsyncSession, movements: list[Movement]) -> list[MovementView]:
        numbers: dict[int, str | None] = {}
        for account_id in {m.account_id for m in movements}:
            account = await self._accounts.get_by_id(db, account_id)
            numbers[account_id] = account.account_number if account else None
        return [MovementView(movement=m, account_number=numbers[m.account_id]) for m in movements]

    async def _publish(
        self,
        event_type: MovementEventType,
        movement: Movement,
        account: Account,
        balance_before: int,
    ) -> None:
        event = MovementEvent(
            event_type=event_type,
            movement_id=movement.id,
            account_id=account.id,
            account_number=account.account_number,
            movement_type=movement.movement_type,
            amount=movement.amount,
            balance_before=balance_before,
            balance_after=movement.balance,
            customer_id=account.customer_id,
        )
        try:
            await self._events.publish_movement_event(event)
        except Exception:
            logger.exception(
                "Event sink failed for %s on movement %s", event_type.value, movement.id
            )
