from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from dotenv import find_dotenv, load_dotenv


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'mongo' (default) or 'memory'
    - MONGO_URL: MongoDB connection string. Default 'mongodb://localhost:27017'
    - MONGO_DATABASE: database holding the todo collection. Default 'golang'
    - MONGO_COLLECTION: collection name. Default 'todolist'
    - MONGO_TIMEOUT_MS: server selection timeout used at startup (default: 5000)
    - HOST / PORT: bind address for the bundled server (default: 0.0.0.0:5000)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root logging level (default: INFO)
    """

    persistence_backend: str
    mongo_url: str
    mongo_database: str
    mongo_collection: str
    mongo_timeout_ms: int
    host: str
    port: int
    cors_allow_origins: List[str]
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


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
    """
    Return application settings loaded from the environment.

    A `.env` file in the working directory (or a parent) is read first; variables already
    present in the process environment take precedence over it.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    backend = _get_env("PERSISTENCE_BACKEND", "mongo").strip().lower()
    if backend not in {"mongo", "memory"}:
        backend = "mongo"

    return Settings(
        persistence_backend=backend,
        mongo_url=_get_env("MONGO_URL", "mongodb://localhost:27017").strip(),
        mongo_database=_get_env("MONGO_DATABASE", "golang").strip(),
        mongo_collection=_get_env("MONGO_COLLECTION", "todolist").strip(),
        mongo_timeout_ms=_parse_int(_get_env("MONGO_TIMEOUT_MS", "5000"), 5000),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "5000"), 5000),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
