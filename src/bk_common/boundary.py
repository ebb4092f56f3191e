"""Transaction scope and error boundary shared by the application services.

`transaction` commits on success and rolls back on ANY exit by exception,
cancellation included, so a unit of work is never half-applied.

`error_boundary` lets AppError subclasses through untouched and turns
everything else into a generic InternalError after logging the stack.
"""

import functools
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import ParamSpec, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.errors import AppError, InternalError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    try:
        yield db
        await db.commit()
    except BaseException:
        await db.rollback()
        raise


def error_boundary(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    def decorator(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await fn(*args, **kwargs)
            except AppError as exc:
                logger.warning("%s failed: %s", operation, exc.message)
                raise
            except Exception as exc:
                logger.exception("Unexpected error during %s", operation)
                raise InternalError() from exc

        return wrapper

    return decorator
