from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app
from backend.core.config import Settings


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        scenario_store_path=str(tmp_path / "scenarios.json"),
        cors_origins=("http://localhost:5173",),
        port=5000,
    )


@pytest.fixture()
def client(settings) -> FlaskClient:
    app = create_app(settings)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
