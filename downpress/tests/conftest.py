"""Shared pytest fixtures for downpress tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from downpress.app import app
from downpress.config import reset_settings_cache
from downpress.games.store import clear_games
from downpress.wagers.scoresheet import HOLE_COUNT, TeeBox


@pytest.fixture(autouse=True)
def _fresh_state():
    clear_games()
    reset_settings_cache()
    yield
    clear_games()
    reset_settings_cache()


@pytest.fixture
def client() -> TestClient:
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def par_fours() -> TeeBox:
    return TeeBox.from_pars([4] * HOLE_COUNT, name="Test")
