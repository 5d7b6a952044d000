"""Sequential page walk over the job feed."""

from collections.abc import Iterable, Iterator
from datetime import datetime

from .errors import FetchError
from .feed_client import FeedClient
from .logging_config import create_execution_logger
from .models import FeedItem, FeedPage


class Pager:
    """Follows the feed's next_id chain one page at a time."""

    def __init__(
        self,
        client: FeedClient,
        max_pages: int = 1000,
        execution_id: str | None = None,
    ):
        """Initialize Pager.

        Args:
            client: Feed client issuing the page requests
            max_pages: Upper bound on pages fetched in one walk
            execution_id: Execution ID for logging context
        """
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self.client = client
        self.max_pages = max_pages
        self.logger = create_execution_logger("pager", execution_id)

    def fetch_since(self, cutoff: datetime) -> FeedPage:
        return self.client.fetch_since(cutoff)

    def fetch_page(self, page_id: str) -> FeedPage:
        return self.client.fetch_page(page_id)

    def iter_pages(self, cutoff: datetime) -> Iterator[FeedPage]:
        """Yield pages starting at ``cutoff`` until the chain ends.

        The walk stops on a page without next_id, on a failed fetch, on a
        repeated next_id, or after ``max_pages`` pages. Fetch failures are
        logged and never raised.
        """
        try:
            page = self.fetch_since(cutoff)
        except FetchError as e:
            self.logger.warning(
                f"Initial fetch failed: {e}", status_code=e.status_code
            )
            return

        requested = set()
        fetched = 1
        while True:
            if page.id:
                requested.add(page.id)
            yield page

            next_id = page.next_id
            if not next_id:
                return
            if next_id in requested:
                self.logger.warning(
                    f"Page id {next_id} already fetched, stopping", page_id=next_id
                )
                return
            if fetched >= self.max_pages:
                self.logger.warning(
                    f"Reached page limit of {self.max_pages}, stopping",
                    page_id=next_id,
                )
                return

            requested.add(next_id)
            try:
                page = self.fetch_page(next_id)
            except FetchError as e:
                self.logger.warning(
                    f"Continuation fetch failed, keeping collected items: {e}",
                    page_id=next_id,
                    status_code=e.status_code,
                )
                return
            fetched += 1

    def collect_matching(
        self, cutoff: datetime, keywords: Iterable[str]
    ) -> list[FeedItem]:
        """Collect items whose title contains any keyword, in page order."""
        keywords = tuple(keywords)
        self.logger.log_execution_start(cutoff=cutoff.isoformat(), keywords=keywords)

        matched: list[FeedItem] = []
        page_number = 0
        for page in self.iter_pages(cutoff):
            page_number += 1
            if page_number == 1 and not page.items:
                break

            page_matches = [item for item in page.items if item.matches(keywords)]
            matched.extend(page_matches)
            self.logger.log_page_fetch(
                page_number, page.id or None, len(page.items), len(page_matches)
            )

        if not matched:
            self.logger.info("No matching items found", page_number=page_number)

        self.logger.log_execution_end(
            success=True, page_number=page_number, matched_count=len(matched)
        )
        return matched
