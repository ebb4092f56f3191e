"""Repository Protocol — dependency inversion for testability.

Unit tests inject an in-memory fake or a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_movement.domain.models import Movement


class MovementRepositoryProtocol(Protocol):
    async def create(self, db: AsyncSession, movement: Movement) -> Movement: ...

    async def update(self, db: AsyncSession, movement: Movement) -> Movement: ...

    async def delete(self, db: AsyncSession, movement_id: int) -> None: ...

    async def get_by_id(self, db: AsyncSession, movement_id: int) -> Movement | None: ...

    async def list_by_account(self, db: AsyncSession, account_id: int) -> list[Movement]: ...

    async def list_all(self, db: AsyncSession) -> list[Movement]: ...

    async def list_by_account_date_range(
        self, db: AsyncSession, account_id: int, start: datetime, end: datetime
    ) -> list[Movement]: ...

    async def list_by_customer_date_range(
        self, db: AsyncSession, customer_id: int, start: datetime, end: datetime
    ) -> list[Movement]: ...
