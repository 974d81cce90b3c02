"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_flag(name: str, default: str) -> bool:
    return _get_env(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    catalog_url: str = _get_env("CATALOG_URL", "https://pastebin.com/raw/JucRNpWs")
    fetch_timeout_seconds: float = float(_get_env("FETCH_TIMEOUT_SECONDS", "10"))
    cache_backend: str = _get_env("CACHE_BACKEND", "memory")
    cache_ttl_seconds: int = int(_get_env("CACHE_TTL_SECONDS", "300"))
    redis_host: str = _get_env("REDIS_HOST", "localhost")
    redis_port: int = int(_get_env("REDIS_PORT", "6379"))
    highlight_open_tag: str = _get_env("HIGHLIGHT_OPEN_TAG", "<em>")
    highlight_close_tag: str = _get_env("HIGHLIGHT_CLOSE_TAG", "</em>")
    # 0 disables the raw body preview in debug logs.
    response_log_preview_chars: int = int(_get_env("RESPONSE_LOG_PREVIEW_CHARS", "0"))
    auth_enabled: bool = _get_flag("AUTH_ENABLED", "true")
    auth_username: str = _get_env("AUTH_USERNAME", "admin")
    auth_password: str = _get_env("AUTH_PASSWORD", "password123")
    token_ttl_seconds: int = int(_get_env("TOKEN_TTL_SECONDS", "3600"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()
