"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    usda_api_key: str | None = None
    usda_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    usda_data_types: str = "Foundation,SR Legacy,Survey (FNDDS)"
    off_user_agent: str | None = None
    off_base_url: str = "https://world.openfoodfacts.org"
    http_timeout_seconds: float = 15
    candidate_pool_size: int = 25
    search_cache_ttl_seconds: int = 300
    search_cache_max_entries: int = 512
    cors_allow_origin: str = "*"
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_data_types(raw: str | None) -> tuple[str, ...]:
    """Parse the comma-separated FDC data type filter."""
    if raw is None:
        return ()
    return tuple(chunk.strip() for chunk in raw.split(",") if chunk.strip())
