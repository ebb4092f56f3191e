"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8080
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import asyncio
import contextlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.bk_account.api.router import router as account_router
from src.bk_common.database import engine
from src.bk_common.errors import AppError, InternalError
from src.bk_common.logging_config import setup_logging
from src.bk_common.redis_client import close_redis, redis_available
from src.bk_common.request_log import RequestLogMiddleware
from src.bk_common.response import error_response
from src.bk_messaging.application.customer_events import run_customer_event_listener
from src.bk_movement.api.router import router as movement_router
from src.bk_report.api.router import router as report_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections, start listeners. Shutdown: dispose."""
    setup_logging(settings.LOG_LEVEL)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if not await redis_available():
        logger.warning("Starting without Redis: lifecycle events will be dropped")

    listener: asyncio.Task[None] | None = None
    if settings.CUSTOMER_EVENTS_ENABLED:
        listener = asyncio.create_task(run_customer_event_listener())
    logger.info("%s started", settings.APP_NAME)
    yield

    if listener is not None:
        listener.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await listener
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, request)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    internal = InternalError()
    resp = error_response(internal.code, internal.message, request)
    return JSONResponse(status_code=internal.http_status, content=resp.model_dump())


app.include_router(account_router, prefix="/api/v1")
app.include_router(movement_router, prefix="/api/v1")
app.include_router(report_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
