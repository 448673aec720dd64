"""Centralized environment-driven settings.

Keep this module lightweight: stdlib only, no app imports, to avoid circular deps.
"""

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

# Run Alembic migrations during application startup.
RUN_MIGRATIONS: bool = _bool_env("RUN_MIGRATIONS", True)

# Feed paging. Configured via .env: FEED_DEFAULT_LIMIT=20, FEED_MAX_LIMIT=100
FEED_DEFAULT_LIMIT: int = _int_env("FEED_DEFAULT_LIMIT", 20)
FEED_MAX_LIMIT: int = _int_env("FEED_MAX_LIMIT", 100)

# Maximum length of a comment body, in characters.
COMMENT_MAX_LENGTH: int = _int_env("COMMENT_MAX_LENGTH", 2000)

# Required; auth.py refuses to start without a key of at least 32 characters.
JWT_SECRET_KEY: str | None = os.getenv("JWT_SECRET_KEY")
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = _int_env("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", 60)

# Shared secret the identity provider signs identity tokens with (HS256).
IDENTITY_TOKEN_SECRET: str | None = os.getenv("IDENTITY_TOKEN_SECRET")
