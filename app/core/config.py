"""Application configuration via environment variables (pydantic-settings)."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # Cache
    CACHE_TTL_SECONDS: float = 30.0
    DB_TIMEOUT_SECONDS: float = 15.0  # upper bound on any single database call

    # Business
    TIMEZONE: str = "Asia/Kolkata"

    # Defaults
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Silver Back Office"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

@lru_cache
def get_settings():
    return Settings()

settings = get_settings()
