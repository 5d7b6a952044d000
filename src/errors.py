"""Error types for the job feed stats pipeline."""


class FeedStatsError(Exception):
    """Base class for pipeline errors."""


class FetchError(FeedStatsError):
    """A page could not be retrieved from the feed API."""

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class ParseError(FetchError):
    """A page body was not a valid feed page."""


class DateParseError(FeedStatsError):
    """An item carries a date_modified value that is not a usable timestamp."""

    def __init__(self, item_id: str, value: str, reason: str = ""):
        message = f"Invalid date_modified {value!r} on item {item_id!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.item_id = item_id
        self.value = value


class MissingTokenError(FeedStatsError):
    """No access token was supplied on the command line."""
