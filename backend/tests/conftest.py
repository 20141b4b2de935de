"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from api.portfolio import get_replay_service
from main import app
from services.portfolio_replay_service import PortfolioReplayService
# Pytest fixtures - imported to make them available to tests
from tests.fixtures import (  # noqa: F401
    equity_asset,
    legacy_asset,
    liability_asset,
)


@pytest.fixture(name="client")
def client_fixture():
    """Create a test client with the default replay service."""
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="client_with_small_cap")
def client_with_small_cap_fixture():
    """Create a test client whose replay service stops after 30 days."""

    def override_get_replay_service():
        return PortfolioReplayService(max_days=30)

    app.dependency_overrides[get_replay_service] = override_get_replay_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
