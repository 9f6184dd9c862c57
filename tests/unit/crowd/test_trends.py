"""Unit tests for hourly crowd trends."""

from datetime import datetime, timedelta, timezone

from src.metro_bc.crowd.trends import dominant_level, hourly_trends
from src.metro_bc.report.domain.entities import CrowdLevel, Report

NOW = datetime(2026, 10, 19, 18, 30, tzinfo=timezone.utc)


def report_at(level, created_at, report_id):
    return Report(
        id=report_id,
        station_id="new-delhi",
        level=level,
        user_id="user-1",
        created_at=created_at,
    )


class TestDominantLevel:
    """Tests for the strict-majority rule."""

    def test_high_needs_strict_lead(self):
        assert dominant_level({"low": 1, "moderate": 1, "high": 2}) == CrowdLevel.HIGH
        assert dominant_level({"low": 0, "moderate": 1, "high": 1}) == CrowdLevel.MODERATE

    def test_moderate_low_tie_is_low(self):
        assert dominant_level({"low": 2, "moderate": 2, "high": 0}) == CrowdLevel.LOW


class TestHourlyTrends:
    """Tests for bucketing reports by UTC hour."""

    def test_returns_24_buckets(self):
        trends = hourly_trends([], NOW)

        assert [t.hour for t in trends] == list(range(24))
        assert all(t.level is None and t.total == 0 for t in trends)

    def test_groups_by_hour(self):
        eight = NOW.replace(hour=8, minute=0)
        reports = [
            report_at(CrowdLevel.HIGH, eight + timedelta(minutes=5), "a"),
            report_at(CrowdLevel.HIGH, eight + timedelta(minutes=40), "b"),
            report_at(CrowdLevel.LOW, eight + timedelta(minutes=50), "c"),
            report_at(CrowdLevel.MODERATE, NOW - timedelta(minutes=10), "d"),
        ]

        trends = hourly_trends(reports, NOW)

        assert trends[8].level == CrowdLevel.HIGH
        assert trends[8].counts == {"low": 1, "moderate": 0, "high": 2}
        assert trends[8].total == 3
        assert trends[18].level == CrowdLevel.MODERATE
        assert trends[12].level is None

    def test_reports_older_than_24_hours_ignored(self):
        reports = [report_at(CrowdLevel.HIGH, NOW - timedelta(hours=25), "old")]
        trends = hourly_trends(reports, NOW)
        assert sum(t.total for t in trends) == 0
