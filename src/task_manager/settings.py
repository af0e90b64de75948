from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TASKS_API_BASE_URL: base URL of the remote task store (default 'http://localhost:8080/api')
    - TASKS_REQUEST_TIMEOUT: request timeout in seconds; empty disables timeouts (default)
    - PERSISTENCE_BACKEND: 'memory' (default) or 'sqlite'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/tasks.db'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - SERVER_HOST / SERVER_PORT: bind address of the reference server (default 127.0.0.1:8080)
    - LOG_LEVEL: logging level name (default 'INFO')
    """

    api_base_url: str
    request_timeout: Optional[float]
    persistence_backend: str
    sqlite_db_path: str
    cors_allow_origins: List[str]
    server_host: str
    server_port: int
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _parse_timeout(value: str) -> Optional[float]:
    v = value.strip()
    if not v:
        return None
    try:
        seconds = float(v)
    except ValueError:
        return None
    return seconds if seconds > 0 else None


def _parse_port(value: str, default: int) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "sqlite"}:
        # Fallback to memory if unsupported
        backend = "memory"

    base_url = _get_env("TASKS_API_BASE_URL", "http://localhost:8080/api").strip().rstrip("/")

    return Settings(
        api_base_url=base_url,
        request_timeout=_parse_timeout(_get_env("TASKS_REQUEST_TIMEOUT", "")),
        persistence_backend=backend,
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/tasks.db").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        server_host=_get_env("SERVER_HOST", "127.0.0.1").strip(),
        server_port=_parse_port(_get_env("SERVER_PORT", "8080"), 8080),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
