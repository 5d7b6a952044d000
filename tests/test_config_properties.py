"""Property-based tests for configuration management."""

import os
from unittest.mock import patch

from hypothesis import given
from hypothesis import strategies as st

from src.config import Config


class TestConfigProperties:
    """Property-based tests for Config class."""

    @given(st.integers(min_value=1, max_value=10_000))
    def test_configurable_page_limit(self, max_pages):
        """
        For any positive page limit configured, the feed config carries it.
        """
        with patch.dict(os.environ, {"FEED_MAX_PAGES": str(max_pages)}):
            config = Config()

        assert config.get_feed_config().max_pages == max_pages

    @given(
        st.text(
            alphabet=st.characters(whitelist_categories=["Ll", "Nd"]),
            min_size=1,
            max_size=30,
        )
    )
    def test_configurable_base_url(self, path):
        """
        For any base URL configured, trailing slashes are dropped.
        """
        url = f"https://feed.example.com/{path}"
        with patch.dict(os.environ, {"FEED_BASE_URL": url + "/"}):
            config = Config()

        assert config.get_feed_config().base_url == url
