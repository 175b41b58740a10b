"""Settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Credentials and defaults for the botlist-space command line."""

    model_config = SettingsConfigDict(
        env_prefix="BOTLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    token: str | None = None
    bot_id: str | None = None
    bot_token: str | None = None
    user_token: str | None = None
    version: int = 1


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
