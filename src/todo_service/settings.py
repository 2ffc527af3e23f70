from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'memory' (default) or 'cassandra'
    - CASSANDRA_CONTACT_POINTS: comma-separated cluster hosts. Default '127.0.0.1'
    - CASSANDRA_PORT: native protocol port. Default 9042
    - CASSANDRA_KEYSPACE: keyspace holding the todos table. Default 'todo_app'
    - CASSANDRA_CREATE_SCHEMA: 'true' to create the todos table at startup (default: false)
    - HOST / PORT: HTTP listen address. Default '0.0.0.0' / 8080
    - LOG_LEVEL: logging level name. Default 'INFO'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    """

    persistence_backend: str
    cassandra_contact_points: List[str]
    cassandra_port: int
    cassandra_keyspace: str
    cassandra_create_schema: bool
    host: str
    port: int
    log_level: str
    cors_allow_origins: List[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return _parse_list(value)


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "cassandra"}:
        backend = "memory"

    return Settings(
        persistence_backend=backend,
        cassandra_contact_points=_parse_list(_get_env("CASSANDRA_CONTACT_POINTS", "127.0.0.1")),
        cassandra_port=_parse_int(_get_env("CASSANDRA_PORT", "9042"), 9042),
        cassandra_keyspace=_get_env("CASSANDRA_KEYSPACE", "todo_app").strip(),
        cassandra_create_schema=_parse_bool(_get_env("CASSANDRA_CREATE_SCHEMA", "false"), False),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "8080"), 8080),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
    )
