"""Pagination configuration settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Application
    app_name: str = "stablepage"
    debug: bool = False
    log_json: bool = True

    # Page size bounds applied to every fetch
    default_page_size: int = 20
    max_page_size: int = 100

    # Unique field appended to every sort as the tie-breaker
    identifier_field: str = "id"

    # Position token signing (HMAC-SHA256, truncated)
    token_secret: str = "stablepage-token-secret-change-in-production"
    token_digest_size: int = 16

    # SQL record source
    database_url: str = "sqlite+aiosqlite:///:memory:"
    database_echo: bool = False

    class Config:
        env_prefix = "STABLEPAGE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
