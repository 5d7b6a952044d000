"""Output formatting for weekly stats."""

import json
from collections.abc import Iterable
from dataclasses import asdict

from .models import WeekStat

NO_RESULT_MESSAGE = "No Result found"


def group_by_year(stats: Iterable[WeekStat]) -> dict[int, list[WeekStat]]:
    """Group stats by year, keeping their order within each year."""
    grouped: dict[int, list[WeekStat]] = {}
    for stat in stats:
        grouped.setdefault(stat.year, []).append(stat)
    return grouped


def format_stats(stats: list[WeekStat] | None) -> str:
    """Render stats as a pretty-printed JSON object keyed by year.

    Absent or empty stats render as NO_RESULT_MESSAGE.
    """
    if not stats:
        return NO_RESULT_MESSAGE

    payload = {
        str(year): [asdict(stat) for stat in year_stats]
        for year, year_stats in group_by_year(stats).items()
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)
