"""Unit tests for the feed HTTP client."""

from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
import requests

from src.errors import FetchError, ParseError
from src.feed_client import FeedClient, rfc1123_date
from src.models import FeedPage

from .factories import make_page_payload, make_response

BASE_URL = "https://example.com/api/v1/feed"


class TestFeedClientUnit:
    """Unit tests for FeedClient requests and failure modes."""

    def setup_method(self):
        self.session = Mock()
        self.session.headers = {}
        self.client = FeedClient(BASE_URL + "/", "test_token", session=self.session)

    def test_session_headers(self):
        """Test the bearer token and JSON accept header are always sent."""
        assert self.session.headers["Authorization"] == "Bearer test_token"
        assert self.session.headers["Accept"] == "application/json"

    def test_fetch_since_sends_if_modified_since(self):
        self.session.get.return_value = make_response(body=make_page_payload())
        cutoff = datetime(2024, 7, 15, tzinfo=UTC)

        page = self.client.fetch_since(cutoff)

        assert isinstance(page, FeedPage)
        self.session.get.assert_called_once_with(
            BASE_URL,
            headers={"If-Modified-Since": "Mon, 15 Jul 2024 00:00:00 GMT"},
            timeout=30,
        )

    def test_fetch_page_uses_page_id_path(self):
        self.session.get.return_value = make_response(
            body=make_page_payload(id="feed-2", next_id=None)
        )

        page = self.client.fetch_page("feed-2")

        assert page.id == "feed-2"
        assert page.next_id is None
        self.session.get.assert_called_once_with(
            f"{BASE_URL}/feed-2", headers=None, timeout=30
        )

    @pytest.mark.parametrize("status_code", [400, 401, 403, 404, 500])
    def test_http_error_raises_fetch_error(self, status_code):
        self.session.get.return_value = make_response(status_code, body={"error": "x"})

        with pytest.raises(FetchError) as exc_info:
            self.client.fetch_page("feed-2")

        assert exc_info.value.status_code == status_code
        assert not isinstance(exc_info.value, ParseError)

    def test_transport_error_raises_fetch_error(self):
        self.session.get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(FetchError, match="connection refused"):
            self.client.fetch_since(datetime(2024, 7, 15, tzinfo=UTC))

    def test_empty_body_raises_fetch_error(self):
        self.session.get.return_value = make_response(200, body=None)

        with pytest.raises(FetchError, match="empty body"):
            self.client.fetch_page("feed-2")

    def test_invalid_json_raises_parse_error(self):
        self.session.get.return_value = make_response(200, body="<html>oops</html>")

        with pytest.raises(ParseError):
            self.client.fetch_page("feed-2")

    def test_wrong_shape_raises_parse_error(self):
        self.session.get.return_value = make_response(200, body=[1, 2, 3])

        with pytest.raises(ParseError):
            self.client.fetch_page("feed-2")

    def test_context_manager_closes_session(self):
        with self.client as client:
            assert client is self.client
        self.session.close.assert_called_once()


class TestRfc1123Date:
    """Unit tests for HTTP date formatting."""

    def test_utc(self):
        assert rfc1123_date(datetime(2025, 1, 1, 8, 30, tzinfo=UTC)) == (
            "Wed, 01 Jan 2025 08:30:00 GMT"
        )

    def test_offset_is_converted_to_gmt(self):
        oslo_winter = timezone(timedelta(hours=1))
        moment = datetime(2025, 1, 1, 0, 30, tzinfo=oslo_winter)

        assert rfc1123_date(moment) == "Tue, 31 Dec 2024 23:30:00 GMT"

    def test_naive_is_treated_as_utc(self):
        assert rfc1123_date(datetime(2024, 7, 15)) == "Mon, 15 Jul 2024 00:00:00 GMT"
