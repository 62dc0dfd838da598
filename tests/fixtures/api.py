"""Shared fixtures for API testing.

These fixtures inject a test GameSession through FastAPI's dependency
override system, so every test gets isolated game state and no background
loop.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_game_session
from main import app


@pytest.fixture
def client_with_session(game_session):
    """Provide a TestClient bound to a PLAYING session on the story tree.

    Yields:
        A tuple of (TestClient, GameSession).
    """
    app.dependency_overrides[get_game_session] = lambda: game_session
    client = TestClient(app)

    yield client, game_session

    app.dependency_overrides.clear()


@pytest.fixture
def client_while_booting(booting_session):
    """Provide a TestClient bound to a session that is still in BOOT.

    Yields:
        A tuple of (TestClient, GameSession).
    """
    app.dependency_overrides[get_game_session] = lambda: booting_session
    client = TestClient(app)

    yield client, booting_session

    app.dependency_overrides.clear()
