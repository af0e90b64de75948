from __future__ import annotations

import itertools
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_manager.api.main import create_app
from task_manager.api.repositories import InMemoryRepository
from task_manager.settings import Settings

from .fakes import FakeTaskRemote


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Explicit settings so tests never depend on the caller's environment.
    """
    return Settings(
        api_base_url="http://testserver/api",
        request_timeout=None,
        persistence_backend="memory",
        sqlite_db_path=str(tmp_path / "tasks.db"),
        cors_allow_origins=["*"],
        server_host="127.0.0.1",
        server_port=8080,
        log_level="INFO",
    )


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings, repository=InMemoryRepository())


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def remote() -> FakeTaskRemote:
    return FakeTaskRemote()


@pytest.fixture()
def id_factory():
    """Deterministic ids "1", "2", ... in creation order."""
    counter = itertools.count(1)
    return lambda: str(next(counter))
