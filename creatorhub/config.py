"""Centralized configuration loading.

Loads environment variables once and provides a typed Settings object
for the rest of the codebase. Values are read when a Settings instance is
created, so settings saved from the GUI apply to the next get_settings().
"""

import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv


# Load .env once at import time
load_dotenv()


def _env(name: str, default: Optional[str] = None):
    return field(default_factory=lambda: os.getenv(name, default))


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass
class Settings:
    # Marketplace REST API
    api_url: str = _env("CREATORHUB_API_URL", "http://localhost:5000")
    session_cookie: Optional[str] = _env("CREATORHUB_SESSION_COOKIE")
    api_token: Optional[str] = _env("CREATORHUB_API_TOKEN")
    request_timeout: float = field(default_factory=lambda: float(os.getenv("CREATORHUB_TIMEOUT", "15")))

    # Active company (falls back to /api/active-company when unset)
    company_id: Optional[int] = field(default_factory=lambda: _optional_int(os.getenv("CREATORHUB_COMPANY_ID")))

    # Board loading
    max_workers: int = field(default_factory=lambda: int(os.getenv("CREATORHUB_MAX_WORKERS", "4")))

    # Logging
    log_level: str = _env("CH_LOG_LEVEL", "INFO")
    verbose: bool = field(default_factory=lambda: os.getenv("CH_VERBOSE", "0") == "1")


def get_settings() -> Settings:
    """Return a new Settings instance (cheap dataclass construction)."""
    return Settings()
