"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    seed_path: Path | None = None
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="COURSE_API_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
