"""EventSink Protocol — best-effort notification of lifecycle events.

Implementations must never raise: a failed publish is logged and dropped,
the business change it describes is already committed.
"""

from typing import Protocol

from src.bk_messaging.domain.events import AccountEvent, MovementEvent


class EventSinkProtocol(Protocol):
    async def publish_movement_event(self, event: MovementEvent) -> None: ...

    async def publish_account_event(self, event: AccountEvent) -> None: ...
