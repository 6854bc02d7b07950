"""Application settings read from the environment."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_JWT_EXPIRES_HOURS = 24
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_UPLOAD_DIR = "uploads"


def jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")

    if not secret:
        raise RuntimeError("JWT_SECRET environment variable is not set")

    return secret


def jwt_expires_hours() -> int:
    raw = os.getenv("JWT_EXPIRES_HOURS")
    if not raw:
        return DEFAULT_JWT_EXPIRES_HOURS

    try:
        hours = int(raw)
    except ValueError:
        raise RuntimeError(f"JWT_EXPIRES_HOURS must be an integer, got {raw!r}")

    if hours <= 0:
        raise RuntimeError("JWT_EXPIRES_HOURS must be positive")
    return hours


def log_level() -> str:
    return os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def admin_credentials() -> tuple[str, str]:
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")

    if not email or not password:
        raise RuntimeError("ADMIN_EMAIL and ADMIN_PASSWORD environment variables must be set")

    return email, password


def upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR", DEFAULT_UPLOAD_DIR))
