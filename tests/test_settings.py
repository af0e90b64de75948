from __future__ import annotations

import pytest

from task_manager.settings import get_settings

ENV_VARS = [
    "TASKS_API_BASE_URL",
    "TASKS_REQUEST_TIMEOUT",
    "PERSISTENCE_BACKEND",
    "SQLITE_DB_PATH",
    "CORS_ALLOW_ORIGINS",
    "SERVER_HOST",
    "SERVER_PORT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = get_settings()
    assert s.api_base_url == "http://localhost:8080/api"
    assert s.request_timeout is None
    assert s.persistence_backend == "memory"
    assert s.sqlite_db_path == "./data/tasks.db"
    assert s.cors_allow_origins == ["*"]
    assert (s.server_host, s.server_port) == ("127.0.0.1", 8080)
    assert s.log_level == "INFO"


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("TASKS_API_BASE_URL", "http://tasks.example/api/")
    monkeypatch.setenv("TASKS_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("PERSISTENCE_BACKEND", "SQLite")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://localhost:3000, http://127.0.0.1:3000")
    monkeypatch.setenv("SERVER_PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = get_settings()
    assert s.api_base_url == "http://tasks.example/api"
    assert s.request_timeout == 2.5
    assert s.persistence_backend == "sqlite"
    assert s.cors_allow_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]
    assert s.server_port == 9000
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name,value,attr,expected",
    [
        ("PERSISTENCE_BACKEND", "mongo", "persistence_backend", "memory"),
        ("TASKS_REQUEST_TIMEOUT", "soon", "request_timeout", None),
        ("TASKS_REQUEST_TIMEOUT", "0", "request_timeout", None),
        ("SERVER_PORT", "http", "server_port", 8080),
        ("SERVER_PORT", "70000", "server_port", 8080),
    ],
)
def test_invalid_values_fall_back(monkeypatch, name, value, attr, expected):
    monkeypatch.setenv(name, value)
    assert getattr(get_settings(), attr) == expected
