"""Inbound customer events — keeps accounts in step with the customer service.

CUSTOMER_DELETED closes every account the customer owns in one transaction.
Everything else is informational. A failing event is logged and dropped so
the listener keeps consuming.
"""

import asyncio
import logging

from pydantic import ValidationError
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bk_account.domain.models import Account
from src.bk_account.domain.repository import AccountRepositoryProtocol
from src.bk_account.infrastructure.persistence import AccountRepository
from src.bk_common.boundary import transaction
from src.bk_common.database import session_scope
from src.bk_common.enums import AccountEventType, CustomerEventType
from src.bk_common.redis_client import get_redis
from src.bk_messaging.domain.events import AccountEvent, CustomerEvent
from src.bk_messaging.domain.sink import EventSinkProtocol
from src.bk_messaging.infrastructure.publisher import RedisEventPublisher

logger = logging.getLogger(__name__)


class CustomerEventHandler:
    def __init__(
        self,
        account_repo: AccountRepositoryProtocol | None = None,
        event_sink: EventSinkProtocol | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._events: EventSinkProtocol = event_sink or RedisEventPublisher()

    async def handle(self, db: AsyncSession, event: CustomerEvent) -> None:
        logger.info(
            "Received customer event: %s for customer %s", event.event_type, event.customer_id
        )
        kind = event.known_type
        try:
            if kind == CustomerEventType.CUSTOMER_DELETED:
                await self._close_accounts(db, event.customer_id)
            elif kind == CustomerEventType.CUSTOMER_STATUS_CHANGED:
                await self._status_changed(db, event)
            elif kind in (CustomerEventType.CUSTOMER_CREATED, CustomerEventType.CUSTOMER_UPDATED):
                logger.info("Customer %s %s", event.customer_id, kind.value.lower())
            else:
                logger.warning("Unknown customer event type: %s", event.event_type)
        except Exception:
            logger.exception(
                "Error processing customer event %s for customer %s",
                event.event_type,
                event.customer_id,
            )

    async def _close_accounts(self, db: AsyncSession, customer_id: int) -> None:
        closed: list[Account] = []
        async with transaction(db):
            for account in await self._accounts.list_by_customer(db, customer_id):
                if not account.is_active:
                    continue
                updated = await self._accounts.deactivate(db, account.id)
                if updated is not None:
                    closed.append(updated)

        logger.info("Deactivated %d accounts for deleted customer %s", len(closed), customer_id)
        for account in closed:
            event = AccountEvent(
                event_type=AccountEventType.ACCOUNT_DELETED,
                account_id=account.id,
                account_number=account.account_number,
                account_type=account.account_type,
                current_balance=account.current_balance,
                customer_id=account.customer_id,
                status=account.status,
            )
            try:
                await self._events.publish_account_event(event)
            except Exception:
                logger.exception("Event sink failed for account %s", account.account_number)

    async def _status_changed(self, db: AsyncSession, event: CustomerEvent) -> None:
        if event.status is not False:
            logger.info("Customer %s is active", event.customer_id)
            return
        for account in await self._accounts.list_by_customer(db, event.customer_id):
            logger.warning(
                "Customer %s is inactive; account %s remains %s",
                event.customer_id,
                account.account_number,
                account.status.value,
            )


async def run_customer_event_listener(
    handler: CustomerEventHandler | None = None, retry_delay_seconds: float = 5.0
) -> None:
    """Consume CUSTOMER_EVENTS_CHANNEL until cancelled, resubscribing after Redis errors."""
    handler = handler or CustomerEventHandler()
    try:
        while True:
            try:
                await _consume(handler)
                logger.warning("Customer event subscription closed by the server")
            except RedisError as exc:
                logger.warning("Customer event subscription lost: %s", exc)
            logger.info("Resubscribing to customer events in %.0fs", retry_delay_seconds)
            await asyncio.sleep(retry_delay_seconds)
    except asyncio.CancelledError:
        logger.info("Customer event listener stopped")
        raise


async def _consume(handler: CustomerEventHandler) -> None:
    redis = await get_redis()
    pubsub = redis.pubsub()
    await pubsub.subscribe(settings.CUSTOMER_EVENTS_CHANNEL)
    logger.info("Listening for customer events on '%s'", settings.CUSTOMER_EVENTS_CHANNEL)
    try:
        async for message in pubsub.listen():
            if message.get("type") != "message":
                continue
            try:
                event = CustomerEvent.model_validate_json(message["data"])
            except ValidationError as exc:
                logger.warning("Discarding malformed customer event: %s", exc)
                continue
            async with session_scope() as db:
                await handler.handle(db, event)
    finally:
        await pubsub.aclose()
