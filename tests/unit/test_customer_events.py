"""Unit tests for CustomerEventHandler."""

import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.bk_account.domain.models import Account
from src.bk_common.enums import AccountEventType, AccountStatus, AccountType
from src.bk_messaging.application import customer_events
from src.bk_messaging.application.customer_events import CustomerEventHandler
from src.bk_messaging.domain.events import CustomerEvent


def _account(account_id: int, status: AccountStatus = AccountStatus.ACTIVE) -> Account:
    return Account(
        id=account_id,
        account_number=f"47875{account_id}",
        account_type=AccountType.SAVINGS,
        initial_balance=1000,
        current_balance=1000,
        customer_id=7,
        status=status,
    )


class TestCustomerEventHandler:
    async def test_deleted_customer_closes_active_accounts(self) -> None:
        repo = AsyncMock()
        repo.list_by_customer.return_value = [
            _account(1),
            _account(2, AccountStatus.INACTIVE),
            _account(3),
        ]
        repo.deactivate.side_effect = lambda db, account_id: _account(
            account_id, AccountStatus.INACTIVE
        )
        sink = AsyncMock()
        db = AsyncMock()
        handler = CustomerEventHandler(account_repo=repo, event_sink=sink)

        await handler.handle(db, CustomerEvent(event_type="CUSTOMER_DELETED", customer_id=7))

        assert [c.args[1] for c in repo.deactivate.await_args_list] == [1, 3]
        db.commit.assert_awaited_once()
        events = [c.args[0] for c in sink.publish_account_event.await_args_list]
        assert [e.account_id for e in events] == [1, 3]
        assert all(e.event_type == AccountEventType.ACCOUNT_DELETED for e in events)

    async def test_status_change_does_not_write(self) -> None:
        repo = AsyncMock()
        repo.list_by_customer.return_value = [_account(1)]
        handler = CustomerEventHandler(account_repo=repo, event_sink=AsyncMock())

        await handler.handle(
            AsyncMock(),
            CustomerEvent(event_type="CUSTOMER_STATUS_CHANGED", customer_id=7, status=False),
        )

        repo.deactivate.assert_not_awaited()

    async def test_created_is_informational(self) -> None:
        repo = AsyncMock()
        handler = CustomerEventHandler(account_repo=repo, event_sink=AsyncMock())

        await handler.handle(AsyncMock(), CustomerEvent(event_type="CUSTOMER_CREATED", customer_id=7))

        repo.list_by_customer.assert_not_awaited()

    async def test_unknown_type_ignored(self) -> None:
        event = CustomerEvent(event_type="CUSTOMER_MERGED", customer_id=7)
        assert event.known_type is None

        repo = AsyncMock()
        await CustomerEventHandler(account_repo=repo, event_sink=AsyncMock()).handle(
            AsyncMock(), event
        )
        repo.list_by_customer.assert_not_awaited()

    async def test_handler_error_is_contained(self) -> None:
        repo = AsyncMock()
        repo.list_by_customer.side_effect = RuntimeError("db down")
        db = AsyncMock()
        handler = CustomerEventHandler(account_repo=repo, event_sink=AsyncMock())

        await handler.handle(db, CustomerEvent(event_type="CUSTOMER_DELETED", customer_id=7))

        db.rollback.assert_awaited_once()


class _FakePubSub:
    def __init__(self, messages: list[dict]) -> None:
        self._messages = messages
        self.subscribed: list[str] = []
        self.closed = False

    async def subscribe(self, channel: str) -> None:
        self.subscribed.append(channel)

    async def listen(self):  # type: ignore[no-untyped-def]
        for message in self._messages:
            yield message
        raise asyncio.CancelledError()

    async def aclose(self) -> None:
        self.closed = True


class TestCustomerEventListener:
    async def test_dispatches_valid_messages_only(self, monkeypatch: pytest.MonkeyPatch) -> None:
        pubsub = _FakePubSub([
            {"type": "subscribe", "data": 1},
            {"type": "message", "data": "not json"},
            {"type": "message", "data": '{"event_type": "CUSTOMER_DELETED", "customer_id": 7}'},
        ])
        redis = MagicMock()
        redis.pubsub.return_value = pubsub

        async def fake_get_redis() -> MagicMock:
            return redis

        @asynccontextmanager
        async def fake_scope():  # type: ignore[no-untyped-def]
            yield AsyncMock()

        monkeypatch.setattr(customer_events, "get_redis", fake_get_redis)
        monkeypatch.setattr(customer_events, "session_scope", fake_scope)
        handler = AsyncMock()

        with pytest.raises(asyncio.CancelledError):
            await customer_events.run_customer_event_listener(handler)

        assert pubsub.subscribed == ["bank.customer-events"]
        assert pubsub.closed
        handler.handle.assert_awaited_once()
        assert handler.handle.await_args.args[1].customer_id == 7
