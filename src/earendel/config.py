"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from earendel.errors import ConfigError

APOD_KEY_ENV = "EARENDEL_APOD_API_KEY"
MAST_KEY_ENV = "EARENDEL_MAST_API_KEY"


class Settings(BaseSettings):
    """Centralized configuration loaded from environment or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    apod_api_key: Optional[str] = Field(default=None, alias=APOD_KEY_ENV)
    mast_api_key: Optional[str] = Field(default=None, alias=MAST_KEY_ENV)
    apod_url: str = Field(default="https://api.nasa.gov/planetary/apod", alias="EARENDEL_APOD_URL")
    mast_url: str = Field(default="https://mast.stsci.edu/api/v0/invoke", alias="EARENDEL_MAST_URL")
    http_timeout: float = Field(default=30.0, alias="EARENDEL_HTTP_TIMEOUT")
    fallback_object_name: str = Field(default="NGC 1566", alias="EARENDEL_OBJECT_NAME")

    def require_apod_key(self) -> str:
        if not self.apod_api_key:
            raise ConfigError(f"{APOD_KEY_ENV} is not set")
        return self.apod_api_key

    def require_mast_key(self) -> str:
        if not self.mast_api_key:
            raise ConfigError(f"{MAST_KEY_ENV} is not set")
        return self.mast_api_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
