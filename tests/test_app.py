# tests/test_app.py

from __future__ import annotations

from datetime import datetime

import pytest

from today_dashboard.config import load_settings
from today_dashboard.core.models import RepeatSchedule, Task
from today_dashboard.exceptions import ConfigMissing

SUNDAY_ONLY = RepeatSchedule(su=True, m=False, t=False, w=False, th=False, f=False, s=False)


def test_dashboard_shows_only_tasks_due_today(client, fake_client, session_headers) -> None:
    fake_client.tasks = [
        Task(id="always", text="Drink water"),
        Task(id="sunday", text="Weekly review", repeat=SUNDAY_ONLY),
    ]
    fake_client.clock = lambda: datetime(2024, 1, 2, 12, 0)  # Tuesday

    resp = client.get("/", headers=session_headers)

    assert resp.status_code == 200
    assert "Drink water" in resp.text
    assert 'data-task-id="always"' in resp.text
    assert "Weekly review" not in resp.text


def test_dashboard_on_sunday_shows_both(client, fake_client, session_headers) -> None:
    fake_client.tasks = [
        Task(id="always", text="Drink water"),
        Task(id="sunday", text="Weekly review", repeat=SUNDAY_ONLY),
    ]
    fake_client.clock = lambda: datetime(2024, 1, 7, 12, 0)

    resp = client.get("/", headers=session_headers)

    assert "Drink water" in resp.text
    assert "Weekly review" in resp.text


def test_dashboard_upstream_failure_is_502(client, fake_client, session_headers) -> None:
    fake_client.fail = True

    resp = client.get("/", headers=session_headers)

    assert resp.status_code == 502
    assert resp.json()["operation"] in {"fetch_day_start_hour", "fetch_all_tasks"}


def test_complete_marks_task_done(client, fake_client, session_headers) -> None:
    resp = client.post("/complete/task-7", headers=session_headers)

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "task_id": "task-7"}
    assert fake_client.completed == ["task-7"]


def test_complete_upstream_failure_is_502(client, fake_client, session_headers) -> None:
    fake_client.fail = True

    resp = client.post("/complete/task-7", headers=session_headers)

    assert resp.status_code == 502
    body = resp.json()
    assert body["operation"] == "mark_task_done"
    assert body["upstream_status"] == 401
    assert fake_client.completed == []


def test_service_routes_bypass_session(client) -> None:
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ping").json()["message"] == "pong"
    assert client.get("/static/style.css").status_code == 200

    redirect = client.get("/dashboard")
    assert redirect.status_code == 301
    assert redirect.headers["location"] == "/"


def test_responses_carry_process_time(client) -> None:
    assert "x-process-time" in client.get("/ping").headers


def test_load_settings_reports_missing_values(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("HABITICA_API_KEY", "HABITICA_USER_ID", "SITE_USERNAME", "SITE_PASSWORD", "AUTHZ_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HABITICA_API_KEY", "key")
    monkeypatch.setenv("HABITICA_USER_ID", "user")

    with pytest.raises(ConfigMissing) as exc_info:
        load_settings()

    assert set(exc_info.value.missing) == {"SITE_USERNAME", "SITE_PASSWORD", "AUTHZ_TOKEN"}


def test_load_settings_rejects_empty_required_value(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HABITICA_API_KEY", "key")
    monkeypatch.setenv("HABITICA_USER_ID", "user")
    monkeypatch.setenv("SITE_USERNAME", "alice")
    monkeypatch.setenv("SITE_PASSWORD", "wonderland")
    monkeypatch.setenv("AUTHZ_TOKEN", "  ")

    with pytest.raises(ConfigMissing) as exc_info:
        load_settings()

    assert exc_info.value.missing == ["AUTHZ_TOKEN"]


def test_load_settings_defaults(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name, value in {
        "HABITICA_API_KEY": "key",
        "HABITICA_USER_ID": "user",
        "SITE_USERNAME": "alice",
        "SITE_PASSWORD": "wonderland",
        "AUTHZ_TOKEN": "token",
    }.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("HABITICA_BASE_URL", raising=False)

    settings = load_settings()

    assert settings.PORT == 3002
    assert settings.HABITICA_BASE_URL == "https://habitica.com/api/v3"
    assert settings.REMOTE_TIMEOUT_SECONDS == 10.0
    with pytest.raises(Exception):
        settings.PORT = 8080
