"""Configuration management for AgentDesk."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AGENTDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Input model
    trigger_char: str = "@"
    send_key: str = "Enter"
    title_length: int = 30

    # Lifecycle delays, measured from dispatch time
    thinking_seconds: float = 2.5
    generating_seconds: float = 4.5
    building_seconds: float = 6.5
    cancel_on_close: bool = False

    # Matching
    match_debounce_seconds: float = 0.3
    max_matches: int = 3

    # Logging
    debug: bool = False
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
