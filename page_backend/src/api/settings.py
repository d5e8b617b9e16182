from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
_LOG_FORMATS = {"text", "json"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - ENABLE_GRAPHQL: 'false' to leave the /graphql endpoint unmounted (default: true)
    - LOG_LEVEL: root log level (default: INFO)
    - LOG_FORMAT: 'text' (default) or 'json'
    - HOST: bind host used by run() (default: localhost)
    - PORT: bind port used by run() (default: 8880)
    """

    cors_allow_origins: List[str]
    enable_graphql: bool
    log_level: str
    log_format: str
    host: str
    port: int


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
    cors_raw = _get_env("CORS_ALLOW_ORIGINS", "*")
    origins = _parse_origins(cors_raw)

    enable_graphql = _parse_bool(_get_env("ENABLE_GRAPHQL", "true"), True)

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        log_level = "INFO"
    log_format = _get_env("LOG_FORMAT", "text").strip().lower()
    if log_format not in _LOG_FORMATS:
        log_format = "text"

    host = _get_env("HOST", "localhost").strip()
    port = _parse_int(_get_env("PORT", "8880"), 8880)
    if not (0 < port < 65536):
        port = 8880

    return Settings(
        cors_allow_origins=origins,
        enable_graphql=enable_graphql,
        log_level=log_level,
        log_format=log_format,
        host=host,
        port=port,
    )
