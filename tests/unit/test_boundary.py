"""Tests for bk_common.boundary — transaction scope and error boundary."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.bk_common.boundary import error_boundary, transaction
from src.bk_common.errors import InternalError, MovementNotFoundError


class TestTransaction:
    async def test_commits_on_success(self) -> None:
        db = AsyncMock()
        async with transaction(db):
            pass
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    async def test_rolls_back_on_error(self) -> None:
        db = AsyncMock()
        with pytest.raises(ValueError):
            async with transaction(db):
                raise ValueError("boom")
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    async def test_rolls_back_on_cancel(self) -> None:
        db = AsyncMock()
        with pytest.raises(asyncio.CancelledError):
            async with transaction(db):
                raise asyncio.CancelledError()
        db.rollback.assert_awaited_once()


class TestErrorBoundary:
    async def test_app_errors_pass_through(self) -> None:
        @error_boundary("lookup")
        async def lookup() -> None:
            raise MovementNotFoundError(3)

        with pytest.raises(MovementNotFoundError):
            await lookup()

    async def test_unexpected_errors_become_internal(self) -> None:
        @error_boundary("lookup")
        async def lookup() -> None:
            raise KeyError("secret detail")

        with pytest.raises(InternalError) as exc_info:
            await lookup()
        assert "secret" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, KeyError)

    async def test_return_value_preserved(self) -> None:
        @error_boundary("sum")
        async def add(a: int, b: int) -> int:
            return a + b

        assert await add(2, b=3) == 5
