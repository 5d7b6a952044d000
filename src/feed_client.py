"""HTTP client for the paginated job feed API."""

from datetime import UTC, datetime
from email.utils import format_datetime

import requests

from .errors import FetchError, ParseError
from .logging_config import create_execution_logger
from .models import FeedPage


class FeedClient:
    """Performs one authenticated GET per feed page."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: int = 30,
        session: requests.Session | None = None,
        execution_id: str | None = None,
    ):
        """Initialize FeedClient.

        Args:
            base_url: Feed endpoint; continuation pages live under it
            token: Bearer access token
            timeout: HTTP request timeout in seconds
            session: Optional pre-built session (used by tests)
            execution_id: Execution ID for logging context
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = create_execution_logger("feed_client", execution_id)
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            }
        )

        self.logger.info("FeedClient initialized", base_url=self.base_url, timeout=timeout)

    def fetch_since(self, cutoff: datetime) -> FeedPage:
        """Fetch the first page of items modified on or after ``cutoff``.

        Raises:
            FetchError: Transport failure, non-2xx status or empty body
            ParseError: Body is not a feed page
        """
        return self._request(
            self.base_url, {"If-Modified-Since": rfc1123_date(cutoff)}
        )

    def fetch_page(self, page_id: str) -> FeedPage:
        """Fetch one continuation page by its opaque id."""
        return self._request(f"{self.base_url}/{page_id}")

    def _request(self, url: str, headers: dict[str, str] | None = None) -> FeedPage:
        self.logger.debug("Requesting feed page", url=url)
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Failed to download {url}: {e}", url=url, error=str(e))
            raise FetchError(f"request to {url} failed: {e}") from e

        if not response.ok:
            self.logger.error(
                f"Http Error: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
            raise FetchError(
                f"{url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content or not response.content.strip():
            self.logger.error("Empty response body", url=url)
            raise FetchError(f"{url} returned an empty body", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON from {url}: {e}", url=url)
            raise ParseError(f"{url} returned invalid JSON: {e}") from e

        return FeedPage.from_dict(payload)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FeedClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def rfc1123_date(moment: datetime) -> str:
    """Format ``moment`` as an HTTP date; naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return format_datetime(moment.astimezone(UTC), usegmt=True)
