# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from today_dashboard.app import create_app
from today_dashboard.config import DashboardSettings
from today_dashboard.dependencies import get_task_client

from .fakes import FakeTaskClient

TOKEN = "s3cr3t-session-token"


@pytest.fixture()
def settings(tmp_path: Path) -> DashboardSettings:
    """
    Settings built from explicit values only.

    _env_file=None keeps a developer's local .env out of the tests.
    """
    return DashboardSettings(
        _env_file=None,
        HABITICA_API_KEY="api-key",
        HABITICA_USER_ID="user-id",
        SITE_USERNAME="alice",
        SITE_PASSWORD="wonderland",
        AUTHZ_TOKEN=TOKEN,
        LOGS_DIR=tmp_path / "logs",
    )


@pytest.fixture()
def fake_client() -> FakeTaskClient:
    return FakeTaskClient()


@pytest.fixture()
def client(settings: DashboardSettings, fake_client: FakeTaskClient) -> TestClient:
    """TestClient without lifespan: the remote client is swapped for the fake."""
    app = create_app(settings)
    app.dependency_overrides[get_task_client] = lambda: fake_client
    return TestClient(app, follow_redirects=False)


@pytest.fixture()
def session_headers(settings: DashboardSettings) -> dict[str, str]:
    return {"Cookie": f"{settings.SESSION_COOKIE_NAME}={TOKEN}"}
