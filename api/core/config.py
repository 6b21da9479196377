"""
Process settings read from the environment.

Read once at startup (see `api/main.py`); request handlers never touch
`os.environ` directly.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .airtable import DEFAULT_API_URL

DEFAULT_BASE_ID = "appcPwpCqAgBuCaBT"
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_CORS_ORIGINS = ("http://localhost:8000",)


@dataclass(frozen=True)
class Settings:
    airtable_api_key: str
    airtable_base_id: str
    airtable_api_url: str
    airtable_timeout_s: float
    cors_allow_origins: tuple[str, ...]
    log_level: str


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def airtable_api_key() -> str:
    key = os.environ.get("AIRTABLE_API_KEY", "").strip()
    if not key:
        raise RuntimeError("AIRTABLE_API_KEY is not set.")
    return key


def airtable_base_id() -> str:
    return os.environ.get("AIRTABLE_BASE_ID", DEFAULT_BASE_ID).strip() or DEFAULT_BASE_ID


def airtable_api_url() -> str:
    return os.environ.get("AIRTABLE_API_URL", DEFAULT_API_URL).strip() or DEFAULT_API_URL


def cors_allow_origins() -> tuple[str, ...]:
    return _env_list("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def load_settings() -> Settings:
    return Settings(
        airtable_api_key=airtable_api_key(),
        airtable_base_id=airtable_base_id(),
        airtable_api_url=airtable_api_url(),
        airtable_timeout_s=_env_float("AIRTABLE_TIMEOUT_S", DEFAULT_TIMEOUT_S),
        cors_allow_origins=cors_allow_origins(),
        log_level=log_level(),
    )


def configure_logging(level: str) -> None:
    # basicConfig is a no-op once the root logger has handlers (e.g. under uvicorn).
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger().setLevel(level)
