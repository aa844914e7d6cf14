from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from the .env file in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", ".env")
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
else:
    load_dotenv()


FALLBACK_ORIGINS = [
    "http://127.0.0.1:5173",
    "http://localhost:5173",
]


def _env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _env_bool(key: str, default: bool) -> bool:
    value = _env_str(key)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return default


def _fallback_database_url() -> str:
    sqlite_db_path = os.path.join(
        os.path.dirname(__file__), "..", "surveyhub_fallback.db"
    )
    return f"sqlite+aiosqlite:///{os.path.abspath(sqlite_db_path)}"


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_echo: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    allowed_origins: List[str] = field(default_factory=lambda: list(FALLBACK_ORIGINS))

    @classmethod
    def from_env(cls) -> "Settings":
        origins_raw = _env_str("BACKEND_ALLOWED_ORIGINS")
        origins = (
            [origin.strip() for origin in origins_raw.split(",") if origin.strip()]
            if origins_raw
            else []
        )
        return cls(
            database_url=_env_str("DATABASE_URL") or _fallback_database_url(),
            database_echo=_env_bool("DATABASE_ECHO", False),
            log_level=(_env_str("LOG_LEVEL") or "INFO").upper(),
            log_json=_env_bool("LOG_JSON", False),
            allowed_origins=origins or list(FALLBACK_ORIGINS),
        )


settings = Settings.from_env()


def get_settings() -> Settings:
    return settings
