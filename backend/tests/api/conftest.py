"""API test fixtures — FastAPI test client with a frozen clock.

Invariants:
    - get_today is overridden to 2026-10-19 for every request
    - dependency_overrides cleared after each test

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the real app, no server process
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from sagenest.infrastructure.clock import get_today
from sagenest.main import app

FROZEN_TODAY = date(2026, 10, 19)


@pytest.fixture
async def client():
    """FastAPI test client with the clock pinned to FROZEN_TODAY."""
    app.dependency_overrides[get_today] = lambda: FROZEN_TODAY

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
