"""Configuration management for the job feed stats pipeline."""

import logging
import os
from dataclasses import dataclass

DEFAULT_FEED_URL = "https://pam-stilling-feed.nav.no/api/v1/feed"


@dataclass
class FeedConfig:
    """Configuration for the feed API and the pagination walk."""

    base_url: str = DEFAULT_FEED_URL
    request_timeout: int = 30
    max_pages: int = 1000
    lookback_weeks: int = 26
    keywords: tuple[str, ...] = ("kotlin", "java")


class Config:
    """Main configuration manager."""

    KEYWORDS = ("kotlin", "java")

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.base_url = os.getenv("FEED_BASE_URL", DEFAULT_FEED_URL).rstrip("/")
        self.lookback_weeks = self._positive_int("FEED_LOOKBACK_WEEKS", 26)
        self.max_pages = self._positive_int("FEED_MAX_PAGES", 1000)
        self.request_timeout = self._positive_int("FEED_REQUEST_TIMEOUT", 30)
        self.log_level = self._log_level(os.getenv("LOG_LEVEL", "INFO"))

    @staticmethod
    def _positive_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from None
        if value < 1:
            raise ValueError(f"{name} must be at least 1, got {value}")
        return value

    @staticmethod
    def _log_level(raw: str) -> str:
        level = raw.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {raw!r}")
        return level

    def get_feed_config(self) -> FeedConfig:
        """Get feed configuration."""
        return FeedConfig(
            base_url=self.base_url,
            request_timeout=self.request_timeout,
            max_pages=self.max_pages,
            lookback_weeks=self.lookback_weeks,
            keywords=self.KEYWORDS,
        )
