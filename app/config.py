"""Environment-driven settings for the service.

Values are read once per process; call `load_settings.cache_clear()` in tests
after changing the environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from .domain.tokens import DEFAULT_SECRET_BYTES

__all__ = ["Settings", "MIN_SECRET_BYTES", "get_secret_bytes_from_env", "load_settings"]

# Below 16 bytes (128 bits) a secret is no longer infeasible to guess.
MIN_SECRET_BYTES = 16


@dataclass(frozen=True)
class Settings:
    app_version: str
    log_level: str
    secret_bytes: int


def get_secret_bytes_from_env() -> int:
    """Return TOKEN_SECRET_BYTES from environment, defaulting to 24."""
    raw = os.getenv("TOKEN_SECRET_BYTES")
    if raw is None:
        return DEFAULT_SECRET_BYTES
    try:
        val = int(raw, 10)
    except ValueError as e:
        raise ValueError("TOKEN_SECRET_BYTES must be an integer") from e
    if val < MIN_SECRET_BYTES:
        raise ValueError(f"TOKEN_SECRET_BYTES must be at least {MIN_SECRET_BYTES}")
    return val


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    return Settings(
        app_version=os.getenv("APP_VERSION", "0.1.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        secret_bytes=get_secret_bytes_from_env(),
    )
