"""Weekly keyword aggregation for matched feed items."""

import calendar
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from dateutil.parser import isoparse

from .errors import DateParseError
from .models import FeedItem, WeekStat

KOTLIN = "kotlin"
JAVA = "java"


@dataclass(frozen=True)
class WeekDefinition:
    """Week numbering rules: the first weekday and the minimal length of week 1.

    ``first_day_of_week`` uses ``calendar`` numbering (Monday is 0).
    """

    first_day_of_week: int = calendar.MONDAY
    minimal_days_in_first_week: int = 4

    def __post_init__(self):
        if not 0 <= self.first_day_of_week <= 6:
            raise ValueError("first_day_of_week must be between 0 and 6")
        if not 1 <= self.minimal_days_in_first_week <= 7:
            raise ValueError("minimal_days_in_first_week must be between 1 and 7")

    def first_week_start(self, year: int) -> date:
        """Return the first day of week 1 of the week-based ``year``."""
        jan1 = date(year, 1, 1)
        offset = (jan1.weekday() - self.first_day_of_week) % 7
        start = jan1 - timedelta(days=offset)
        # 7 - offset days of the new year fall in the week holding Jan 1
        if 7 - offset < self.minimal_days_in_first_week:
            start += timedelta(days=7)
        return start


# Monday start, week 1 holds the year's first Thursday
ISO_WEEK = WeekDefinition(calendar.MONDAY, 4)


def week_key(
    moment: datetime | date, week_definition: WeekDefinition = ISO_WEEK
) -> tuple[int, int]:
    """Return the (week-based year, week of week-based year) of ``moment``.

    Datetimes are bucketed by their local date in their own offset.
    """
    day = moment.date() if isinstance(moment, datetime) else moment

    year = day.year
    start = week_definition.first_week_start(year)
    if day < start:
        year -= 1
        start = week_definition.first_week_start(year)
    else:
        next_start = week_definition.first_week_start(year + 1)
        if day >= next_start:
            year += 1
            start = next_start

    return year, (day - start).days // 7 + 1


def parse_date_modified(item: FeedItem) -> datetime:
    """Parse ``item.date_modified`` into a timezone-aware datetime.

    Raises:
        DateParseError: The value is malformed or has no UTC offset
    """
    try:
        moment = isoparse(item.date_modified)
    except (ValueError, OverflowError) as e:
        raise DateParseError(item.id, item.date_modified, str(e)) from e

    if moment.tzinfo is None:
        raise DateParseError(item.id, item.date_modified, "missing UTC offset")
    return moment


def aggregate(
    items: Iterable[FeedItem] | None, week_definition: WeekDefinition = ISO_WEEK
) -> list[WeekStat] | None:
    """Count kotlin and java titles per week bucket.

    Returns None for None input and an empty list for empty input. Buckets
    come out in ascending (year, week) order; buckets without any keyword
    hit are dropped. An item matching both keywords counts for both.
    """
    if items is None:
        return None

    buckets: dict[tuple[int, int], list[FeedItem]] = defaultdict(list)
    for item in items:
        moment = parse_date_modified(item)
        try:
            key = week_key(moment, week_definition)
        except (ValueError, OverflowError) as e:
            # Week numbering needs the neighbouring years to exist
            raise DateParseError(item.id, item.date_modified, str(e)) from e
        buckets[key].append(item)

    stats = []
    for (year, week), group in sorted(buckets.items()):
        kotlin_count = sum(1 for item in group if item.matches((KOTLIN,)))
        java_count = sum(1 for item in group if item.matches((JAVA,)))
        if kotlin_count or java_count:
            stats.append(WeekStat(year, week, kotlin_count, java_count))
    return stats
