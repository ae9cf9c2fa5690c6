"""
Service settings.

Configuration loaded from environment variables and an optional ``.env`` file.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Products API configuration."""

    host: str = "0.0.0.0"
    port: int = 3000

    # Shared secret expected in the X-API-Key header of mutating requests
    api_key: Optional[str] = None

    # "development" echoes stack traces in error responses
    app_env: str = "production"

    log_level: str = "INFO"
    log_format: str = "text"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance.
    """
    return Settings()
