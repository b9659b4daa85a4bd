"""Root conftest: shared fixtures for all tests.

Provides:
- Metadata and snapshot fixtures for the documentation pipeline
- Settings overrides so no test ever sleeps for a real cooldown
- API client with dependency overrides (no lifespan, no real clients)
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from repowiki.config.settings import settings
from tests.helpers.mock_factories import make_metadata


@pytest.fixture(autouse=True)
def fast_pacing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Zero out every delay and cooldown for the duration of a test."""
    monkeypatch.setattr(settings, "rate_limit_cooldown_seconds", 0.0)
    monkeypatch.setattr(settings, "generation_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "wiki_rate_limit_cooldown_seconds", 0.0)
    monkeypatch.setattr(settings, "wiki_generation_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "structure_service_command", "")


@pytest.fixture
def metadata():
    return make_metadata()


@pytest.fixture
async def api_client():
    """HTTP client against the app with no lifespan.

    Every client dependency starts out as an inert double, so validation
    paths run without ``app.state``. Tests install their own doubles via
    ``app.dependency_overrides``.
    """
    from repowiki.api.deps import get_analysis_service, get_anthropic_client, get_github_ops
    from repowiki.main import app

    app.dependency_overrides[get_github_ops] = lambda: MagicMock()
    app.dependency_overrides[get_anthropic_client] = lambda: MagicMock()
    app.dependency_overrides[get_analysis_service] = lambda: MagicMock()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
