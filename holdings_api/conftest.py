"""
Shared pytest fixtures for the Holdings Tracker API.

Each test gets its own migrated SQLite file database attached to the app;
tokens are signed with the same helper the dev token endpoint uses.
"""

from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from holdings_api.auth_context import create_access_token
from holdings_api.db import Database
from holdings_api.main import app
from holdings_api.migrate import run_migrations
from holdings_api.sample_bodies import USER_A


@pytest.fixture
def database(tmp_path) -> Database:
    db = Database(f"sqlite:///{tmp_path / 'holdings_test.db'}")
    run_migrations(db)
    yield db
    db.dispose()


@pytest.fixture
def client(database) -> TestClient:
    previous = app.state.database
    app.state.database = database
    yield TestClient(app)
    app.state.database = previous


@pytest.fixture
def auth_headers() -> Callable[[str], Dict[str, str]]:
    def _headers(user_id: str = USER_A) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}
    return _headers
