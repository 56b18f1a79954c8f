from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from appdirs import user_data_dir, user_log_dir
from dotenv import load_dotenv

APP_NAME = "cdb"


def _default_preferences_path() -> str:
    return str(Path(user_data_dir(APP_NAME)) / "table_preferences.json")


@dataclass
class Settings:
    database_url: str = "sqlite:///./cdb.sqlite3"
    log_dir: str = field(default_factory=lambda: user_log_dir(APP_NAME))
    log_level: str = "INFO"
    detailed_logging: bool = False
    allowed_email_domains: list[str] = field(default_factory=list)
    auth_base_url: str = "http://localhost:3000"
    auth_session_path: str = "/api/auth/get-session"
    auth_timeout_seconds: float = 5.0
    table_preferences_path: str = field(default_factory=_default_preferences_path)
    search_debounce_ms: int = 300
    table_batch_size: int = 30
    load_more_threshold_px: int = 2160


def _split_list(raw: str) -> list[str]:
    return [part for part in re.split(r"[ ,]+", raw.strip()) if part]


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


@lru_cache()
def get_settings() -> Settings:
    dotenv_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path)

    return Settings(
        database_url=os.getenv("DATABASE_URL") or "sqlite:///./cdb.sqlite3",
        log_dir=os.getenv("LOG_DIR") or user_log_dir(APP_NAME),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        detailed_logging=_env_flag("DETAILED_LOGGING"),
        allowed_email_domains=[
            domain.lower()
            for domain in _split_list(os.getenv("ALLOWED_EMAIL_DOMAINS", ""))
        ],
        auth_base_url=os.getenv("AUTH_BASE_URL", "http://localhost:3000").rstrip("/"),
        auth_session_path=os.getenv("AUTH_SESSION_PATH", "/api/auth/get-session"),
        auth_timeout_seconds=float(os.getenv("AUTH_TIMEOUT_SECONDS", "5")),
        table_preferences_path=os.getenv("TABLE_PREFERENCES_PATH")
        or _default_preferences_path(),
        search_debounce_ms=int(os.getenv("SEARCH_DEBOUNCE_MS", "300")),
        table_batch_size=int(os.getenv("TABLE_BATCH_SIZE", "30")),
        load_more_threshold_px=int(os.getenv("LOAD_MORE_THRESHOLD_PX", "2160")),
    )
