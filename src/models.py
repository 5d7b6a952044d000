"""Data models for the job feed stats pipeline."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .errors import ParseError


def _text(data: dict[str, Any], *keys: str) -> str:
    """Return the first non-null value among ``keys`` as a string."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return str(value)
    return ""


def _require_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class FeedEntry:
    """Metadata attached to a feed item. Passed through, never aggregated."""

    uuid: str
    status: str
    title: str
    business_name: str
    municipal: str
    last_modified: str

    @classmethod
    def from_dict(cls, data: Any) -> "FeedEntry":
        data = _require_object(data, "feed_entry")
        return cls(
            uuid=_text(data, "uuid"),
            status=_text(data, "status"),
            title=_text(data, "title"),
            business_name=_text(data, "business_name", "businessName"),
            municipal=_text(data, "municipal"),
            last_modified=_text(data, "last_modified", "sist_endret", "sistEndret"),
        )


@dataclass(frozen=True)
class FeedItem:
    """A single job posting from the feed."""

    id: str
    url: str
    title: str
    content_text: str
    date_modified: str  # raw ISO-8601, parsed by the aggregator
    feed_entry: FeedEntry | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "FeedItem":
        data = _require_object(data, "feed item")
        title = data.get("title")
        if not isinstance(title, str):
            raise ParseError(f"feed item {data.get('id')!r} has no title")

        raw_entry = data.get("feed_entry", data.get("_feed_entry"))
        return cls(
            id=_text(data, "id"),
            url=_text(data, "url"),
            title=title,
            content_text=_text(data, "content_text"),
            date_modified=_text(data, "date_modified"),
            feed_entry=FeedEntry.from_dict(raw_entry) if raw_entry is not None else None,
        )

    def matches(self, keywords: Iterable[str]) -> bool:
        """True if the title contains any keyword, ignoring case."""
        title = self.title.casefold()
        return any(keyword.casefold() in title for keyword in keywords)


@dataclass(frozen=True)
class FeedPage:
    """One fetched page of the feed."""

    version: str
    title: str
    home_page_url: str
    feed_url: str
    description: str
    next_url: str
    id: str
    next_id: str | None  # None on the last page
    items: tuple[FeedItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Any) -> "FeedPage":
        data = _require_object(data, "feed page")

        raw_items = data.get("items")
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise ParseError(
                f"feed page items must be a list, got {type(raw_items).__name__}"
            )

        return cls(
            version=_text(data, "version"),
            title=_text(data, "title"),
            home_page_url=_text(data, "home_page_url"),
            feed_url=_text(data, "feed_url"),
            description=_text(data, "description"),
            next_url=_text(data, "next_url"),
            id=_text(data, "id"),
            next_id=_text(data, "next_id") or None,
            items=tuple(FeedItem.from_dict(item) for item in raw_items),
        )


@dataclass(frozen=True)
class WeekStat:
    """Keyword counts for one (ISO year, ISO week) bucket."""

    year: int
    week: int
    kotlin_count: int
    java_count: int
