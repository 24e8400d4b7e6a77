"""API test fixtures: application and HTTP client.

The application is built with mock AI settings and run inside its lifespan,
so app.state holds a fresh selector (and an empty cache) for every test.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from hybrid_selector.config.settings import Settings
from hybrid_selector.main import create_app


# ─────────────────────────────────────────────────────────────────────────────
# Application Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def api_settings() -> Settings:
    """Offline settings: mock AI, no .env."""
    return Settings(_env_file=None, ai_mock_mode=True, anthropic_api_key="")


@pytest.fixture
async def api_app(api_settings: Settings) -> AsyncIterator[FastAPI]:
    """Application with its lifespan running."""
    app = create_app(api_settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def api_client(api_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the running application."""
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as client:
        yield client
