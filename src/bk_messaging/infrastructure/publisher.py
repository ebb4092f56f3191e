"""RedisEventPublisher — EventSink over Redis Pub/Sub.

Fire-and-forget: exceptions from Redis are logged with the stack trace and
swallowed so the caller's already-committed operation is never affected.
"""

import logging
from collections.abc import Awaitable, Callable

import redis.asyncio as aioredis

from config.settings import settings
from src.bk_common.redis_client import get_redis
from src.bk_messaging.domain.events import AccountEvent, MovementEvent

logger = logging.getLogger(__name__)


class RedisEventPublisher:
    def __init__(
        self,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
        movement_channel: str | None = None,
        account_channel: str | None = None,
    ) -> None:
        self._redis_factory = redis_factory
        self._movement_channel = movement_channel or settings.MOVEMENT_EVENTS_CHANNEL
        self._account_channel = account_channel or settings.ACCOUNT_EVENTS_CHANNEL

    async def publish_movement_event(self, event: MovementEvent) -> None:
        sent = await self._publish(
            self._movement_channel, event.event_type.value, event.model_dump_json()
        )
        if sent:
            logger.info(
                "Published %s event: %s %d on account %s",
                event.event_type.value,
                event.movement_type.value,
                event.amount,
                event.account_number,
            )

    async def publish_account_event(self, event: AccountEvent) -> None:
        sent = await self._publish(
            self._account_channel, event.event_type.value, event.model_dump_json()
        )
        if sent:
            logger.info(
                "Published %s event for account %s (ID: %d)",
                event.event_type.value,
                event.account_number,
                event.account_id,
            )

    async def _publish(self, channel: str, event_type: str, payload: str) -> bool:
        try:
            redis = await self._redis_factory()
            await redis.publish(channel, payload)
        except Exception:
            logger.exception("Error publishing %s event to channel '%s'", event_type, channel)
            return False
        logger.debug("Event sent to channel '%s': %s", channel, event_type)
        return True
