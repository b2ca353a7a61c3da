"""Application configuration using pydantic-settings."""
from datetime import timedelta
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str

    # Secret salt for feed tokens - changing it changes every user's feed URL
    feed_salt: str = Field(validation_alias="MOVIE_MAGNET_BOT_SALT")

    # Feed
    feed_url: str = Field(
        default="https://example.com/feeds/{}",
        validation_alias="USER_FEED_URL",
    )
    feed_title: str = Field(default="Movie Magnet Bot", validation_alias="USER_FEED_TITLE")
    items_per_feed: int = Field(default=50, ge=1, validation_alias="ITEMS_PER_FEED")

    # Users who haven't polled their feed for this long are considered inactive
    feed_check_threshold_hours: float = Field(
        default=24,
        gt=0,
        validation_alias="FEED_CHECK_THRESHOLD_HOURS",
    )

    @field_validator("feed_salt")
    @classmethod
    def validate_feed_salt(cls, value: str) -> str:
        """Reject an empty salt; it would make feed tokens trivially guessable."""
        if not value.strip():
            raise ValueError("MOVIE_MAGNET_BOT_SALT must not be empty")
        return value

    @field_validator("feed_url")
    @classmethod
    def validate_feed_url(cls, value: str) -> str:
        """The feed URL template must have exactly one `{}` placeholder for the token."""
        if value.count("{}") != 1:
            raise ValueError("USER_FEED_URL must contain exactly one '{}' placeholder")
        return value

    @property
    def feed_check_threshold(self) -> timedelta:
        """Feed activity threshold as a timedelta."""
        return timedelta(hours=self.feed_check_threshold_hours)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
