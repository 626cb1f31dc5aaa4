from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

DB_FILE_NAME = "data.db"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TODO_DATA_DIR: application data directory holding the database file. Default './data'
    - TODO_DB_MAX_CONNECTIONS: upper bound of pooled sqlite connections. Default 10
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: log level for the 'todo_store' logger. Default 'INFO'
    """

    data_dir: str
    db_max_connections: int
    cors_allow_origins: List[str]
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int, minimum: int = 1) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return max(parsed, minimum)


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


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    data_dir = _get_env("TODO_DATA_DIR", "./data").strip()
    max_conns = _parse_int(_get_env("TODO_DB_MAX_CONNECTIONS", "10"), 10)
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "INFO"

    return Settings(
        data_dir=data_dir,
        db_max_connections=max_conns,
        cors_allow_origins=origins,
        log_level=log_level,
    )


# PUBLIC_INTERFACE
def get_db_path(data_dir: str) -> str:
    """Return the database file location inside the given data directory."""
    return os.path.join(data_dir, DB_FILE_NAME)
