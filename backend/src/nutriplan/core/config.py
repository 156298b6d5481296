from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PATH = Path.cwd() / ".env"

# Load .env early so Settings and anything reading os.environ see the same values.
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "nutriplan-db"
    database_url: str = "sqlite:///nutriplan.db"
    database_echo: bool = False

    # Connection pool / per-connection pragmas
    pool_size: int = 16
    pool_timeout: float = 30.0
    busy_timeout: float = 30.0
    enable_wal: bool = True
    enable_foreign_keys: bool = True

    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    return Settings()
