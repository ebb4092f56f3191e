"""Unit tests for RedisEventPublisher with a mocked Redis client."""

import json
from unittest.mock import AsyncMock

from src.bk_common.enums import (
    AccountEventType,
    AccountStatus,
    MovementEventType,
    MovementType,
)
from src.bk_messaging.domain.events import AccountEvent, MovementEvent
from src.bk_messaging.infrastructure.publisher import RedisEventPublisher


def _movement_event() -> MovementEvent:
    return MovementEvent(
        event_type=MovementEventType.MOVEMENT_CREATED,
        movement_id=10,
        account_id=1,
        account_number="478758",
        movement_type=MovementType.DEBIT,
        amount=57500,
        balance_before=200000,
        balance_after=142500,
        customer_id=7,
    )


def _publisher(redis: AsyncMock) -> RedisEventPublisher:
    async def factory() -> AsyncMock:
        return redis

    return RedisEventPublisher(
        redis_factory=factory, movement_channel="mv", account_channel="acct"
    )


class TestRedisEventPublisher:
    async def test_movement_event_sent_as_json(self) -> None:
        redis = AsyncMock()

        await _publisher(redis).publish_movement_event(_movement_event())

        channel, payload = redis.publish.await_args.args
        assert channel == "mv"
        body = json.loads(payload)
        assert body["event_type"] == "MOVEMENT_CREATED"
        assert body["balance_after"] == 142500

    async def test_account_event_channel(self) -> None:
        redis = AsyncMock()
        event = AccountEvent(
            event_type=AccountEventType.ACCOUNT_DELETED,
            account_id=1,
            account_number="478758",
            status=AccountStatus.INACTIVE,
        )

        await _publisher(redis).publish_account_event(event)

        channel, payload = redis.publish.await_args.args
        assert channel == "acct"
        assert json.loads(payload)["status"] == "INACTIVE"

    async def test_redis_failure_is_swallowed(self) -> None:
        redis = AsyncMock()
        redis.publish.side_effect = ConnectionError("redis down")

        await _publisher(redis).publish_movement_event(_movement_event())

        redis.publish.assert_awaited_once()

    async def test_factory_failure_is_swallowed(self) -> None:
        async def factory() -> AsyncMock:
            raise ConnectionError("no pool")

        publisher = RedisEventPublisher(redis_factory=factory)
        assert await publisher._publish("mv", "MOVEMENT_CREATED", "{}") is False
