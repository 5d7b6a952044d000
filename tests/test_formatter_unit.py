"""Unit tests for output formatting."""

import json

from src.formatter import NO_RESULT_MESSAGE, format_stats, group_by_year
from src.models import WeekStat


class TestFormatterUnit:
    """Unit tests for formatting weekly stats."""

    def test_group_by_year_keeps_order(self):
        stats = [
            WeekStat(2024, 51, 1, 0),
            WeekStat(2024, 52, 0, 2),
            WeekStat(2025, 1, 3, 1),
        ]

        grouped = group_by_year(stats)

        assert list(grouped) == [2024, 2025]
        assert grouped[2024] == stats[:2]
        assert grouped[2025] == stats[2:]

    def test_format_stats_json(self):
        stats = [WeekStat(2024, 52, 0, 2), WeekStat(2025, 2, 1, 1)]

        output = format_stats(stats)

        assert json.loads(output) == {
            "2024": [{"year": 2024, "week": 52, "kotlin_count": 0, "java_count": 2}],
            "2025": [{"year": 2025, "week": 2, "kotlin_count": 1, "java_count": 1}],
        }
        # Pretty-printed
        assert "\n" in output

    def test_no_result(self):
        assert format_stats(None) == NO_RESULT_MESSAGE
        assert format_stats([]) == NO_RESULT_MESSAGE
