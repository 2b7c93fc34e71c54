# src/todo_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the API token is optional).
- Everything that needs settings accepts them injected; get_settings() is the default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO_SYNC"

_settings: Settings | None = None


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_optional(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Task Service ----
    base_url: str
    todos_path: str
    api_token: str | None
    # None -> keep the httpx default timeout
    http_timeout_seconds: float | None

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-sync").strip() or "todo-sync"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo-sync"))

        base_url = _env(_k("BASE_URL"), "http://localhost:5000").strip().rstrip("/")
        todos_path = "/" + _env(_k("TODOS_PATH"), "/api/todos").strip().strip("/")
        api_token = _env_optional(_k("API_TOKEN"))

        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), None)
        if http_timeout_seconds is not None and http_timeout_seconds <= 0:
            http_timeout_seconds = None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            base_url=base_url,
            todos_path=todos_path,
            api_token=api_token,
            http_timeout_seconds=http_timeout_seconds,
        )


def get_settings() -> Settings:
    """Load .env (never overriding real env vars) and build Settings once."""
    global _settings
    if _settings is None:
        load_dotenv(override=False)
        _settings = Settings.from_env()
    return _settings
