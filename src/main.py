"""Command line entry point for the job feed stats pipeline."""

import argparse
import sys
from datetime import UTC, datetime, timedelta

from .aggregator import aggregate
from .config import Config, FeedConfig
from .errors import DateParseError, MissingTokenError
from .feed_client import FeedClient
from .formatter import NO_RESULT_MESSAGE, format_stats
from .logging_config import create_execution_logger, setup_structured_logging
from .models import WeekStat
from .pager import Pager


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="job-feed-stats",
        description="Weekly kotlin/java job posting counts from the job feed API.",
    )
    parser.add_argument("token", nargs="?", help="Bearer access token for the feed API")
    return parser.parse_args(argv)


def require_token(token: str | None) -> str:
    """Return the stripped token or raise MissingTokenError."""
    if not token or not token.strip():
        raise MissingTokenError("Missing access token!")
    return token.strip()


def compute_cutoff(now: datetime, lookback_weeks: int) -> datetime:
    """Start of ``now``'s day in UTC, ``lookback_weeks`` weeks back."""
    start_of_day = datetime.combine(now.astimezone(UTC).date(), datetime.min.time(), UTC)
    return start_of_day - timedelta(weeks=lookback_weeks)


def run(
    token: str,
    feed_config: FeedConfig,
    now: datetime | None = None,
    client: FeedClient | None = None,
    execution_id: str | None = None,
) -> list[WeekStat] | None:
    """Walk the feed from the lookback cutoff and aggregate the matches.

    Returns None when the feed yielded no matching items.

    Raises:
        DateParseError: A matched item has an unusable date_modified
    """
    now = now or datetime.now(UTC)
    cutoff = compute_cutoff(now, feed_config.lookback_weeks)

    owns_client = client is None
    if client is None:
        client = FeedClient(
            feed_config.base_url,
            token,
            timeout=feed_config.request_timeout,
            execution_id=execution_id,
        )

    try:
        pager = Pager(client, max_pages=feed_config.max_pages, execution_id=execution_id)
        items = pager.collect_matching(cutoff, feed_config.keywords)
    finally:
        if owns_client:
            client.close()

    if not items:
        return None
    return aggregate(items)


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline and print the result. Returns the exit code."""
    args = parse_args(argv)

    try:
        token = require_token(args.token)
    except MissingTokenError as e:
        print("Please include access token", file=sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        config = Config()
    except ValueError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2
    setup_structured_logging(config.log_level)

    execution_id = f"run_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    main_logger = create_execution_logger("main", execution_id)
    main_logger.log_execution_start()

    try:
        stats = run(token, config.get_feed_config(), execution_id=execution_id)
    except DateParseError as e:
        main_logger.error(f"Aggregation aborted: {e}", item_id=e.item_id)
        main_logger.log_execution_end(success=False)
        print(f"error: {e}", file=sys.stderr)
        return 1

    main_logger.log_metrics(
        {
            "weeks": len(stats or []),
            "kotlin_total": sum(stat.kotlin_count for stat in stats or []),
            "java_total": sum(stat.java_count for stat in stats or []),
        }
    )
    main_logger.log_execution_end(success=True)

    print(format_stats(stats) if stats else NO_RESULT_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
