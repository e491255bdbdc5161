from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    store_backend: Literal["memory", "sql", "firestore"] = "memory"

    database_url: str | None = None  # e.g. sqlite+aiosqlite:///./analytics.db
    database_echo: bool = False

    firestore_project_id: str | None = None
    firestore_database: str = "(default)"
    firestore_api_key: str | None = None
    firestore_base_url: str = "https://firestore.googleapis.com/v1"
    firestore_timeout_seconds: float = 10.0
    firestore_page_size: int = Field(default=300, ge=1, le=1000)

    currency_code: str = "USD"
    log_level: str = "INFO"

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
