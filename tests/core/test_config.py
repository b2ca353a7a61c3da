"""Tests for application configuration."""
from datetime import timedelta

import pytest
from pydantic import ValidationError

from core.config import Settings


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "database_url": "postgresql+asyncpg://localhost/test",
        "MOVIE_MAGNET_BOT_SALT": "pepper",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestFeedSettings:
    """Feed-related settings and their defaults."""

    def test_defaults(self) -> None:
        settings = make_settings()
        assert settings.feed_salt == "pepper"
        assert settings.feed_url == "https://example.com/feeds/{}"
        assert settings.feed_title == "Movie Magnet Bot"
        assert settings.items_per_feed == 50
        assert settings.feed_check_threshold == timedelta(hours=24)

    def test_threshold_hours_converted_to_timedelta(self) -> None:
        settings = make_settings(FEED_CHECK_THRESHOLD_HOURS="1.5")
        assert settings.feed_check_threshold == timedelta(minutes=90)

    def test_feed_url_may_contain_other_braces(self) -> None:
        settings = make_settings(USER_FEED_URL="https://f.example/{}?utm={campaign}")
        assert settings.feed_url == "https://f.example/{}?utm={campaign}"

    def test_values_read_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USER_FEED_URL", "https://bot.example.org/rss/{}")
        monkeypatch.setenv("ITEMS_PER_FEED", "10")
        settings = make_settings()
        assert settings.feed_url == "https://bot.example.org/rss/{}"
        assert settings.items_per_feed == 10


class TestFeedSettingsValidation:
    """Invalid configuration is rejected at startup."""

    def test_missing_salt_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MOVIE_MAGNET_BOT_SALT", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, database_url="postgresql+asyncpg://localhost/test")

    @pytest.mark.parametrize("salt", ["", "   "])
    def test_blank_salt_rejected(self, salt: str) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            make_settings(MOVIE_MAGNET_BOT_SALT=salt)

    @pytest.mark.parametrize(
        "feed_url",
        ["https://example.com/feeds/", "https://example.com/{}/{}"],
    )
    def test_feed_url_needs_single_placeholder(self, feed_url: str) -> None:
        with pytest.raises(ValidationError, match="placeholder"):
            make_settings(USER_FEED_URL=feed_url)

    @pytest.mark.parametrize("items", ["0", "-1"])
    def test_items_per_feed_must_be_positive(self, items: str) -> None:
        with pytest.raises(ValidationError):
            make_settings(ITEMS_PER_FEED=items)

    def test_threshold_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            make_settings(FEED_CHECK_THRESHOLD_HOURS="0")
