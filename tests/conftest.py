"""Shared fixtures: an in-process HTTP client for the bank accounts app.

No lifespan runs, so neither PostgreSQL nor Redis is contacted unless a test
reaches a real repository.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
