"""Unit tests for the crowd level aggregator."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from core.config import CrowdSettings
from src.metro_bc.crowd.aggregator import (
    AggregationProfile,
    CrowdAggregator,
    CrowdEstimate,
    credibility_weight,
    time_weight,
)
from src.metro_bc.report.domain.entities import CrowdLevel, Report
from src.metro_bc.shared.domain.exceptions import InvalidCrowdLevelError

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


def report(level, minutes_ago=0.0, likes=0, report_id=None, station_id="rajiv-chowk"):
    return Report(
        id=report_id or f"r-{level}-{minutes_ago}-{likes}",
        station_id=station_id,
        level=CrowdLevel.normalize(level),
        user_id="user-1",
        created_at=NOW - timedelta(minutes=minutes_ago),
        likes=likes,
    )


@pytest.fixture
def aggregator():
    profile = AggregationProfile(name="map", window_minutes=120, recent_window_minutes=10, decay_minutes=60)
    return CrowdAggregator(profile)


class TestWeights:
    """Tests for the per-report weight components."""

    def test_time_weight_decays(self):
        assert time_weight(0, 60) == 1.0
        assert time_weight(60, 60) == pytest.approx(0.3679, abs=1e-4)
        assert time_weight(30, 60) > time_weight(90, 60)

    def test_future_timestamp_clamped(self):
        """Clock skew into the future counts as age zero."""
        assert time_weight(-5, 60) == 1.0

    def test_credibility_weight(self):
        assert credibility_weight(0) == 1.0
        assert credibility_weight(10) == pytest.approx(1.7194, abs=1e-4)


class TestAggregate:
    """Tests for CrowdAggregator.aggregate."""

    def test_empty_window_defaults_to_low(self, aggregator):
        estimate = aggregator.aggregate("rajiv-chowk", [], NOW)

        assert estimate.level == CrowdLevel.LOW
        assert estimate.confidence == 0
        assert estimate.report_count == 0
        assert estimate.last_updated is None

    def test_reports_outside_window_ignored(self, aggregator):
        estimate = aggregator.aggregate("rajiv-chowk", [report("high", minutes_ago=121)], NOW)
        assert estimate == CrowdEstimate.empty("rajiv-chowk")

    def test_single_report_confidence_scaled_by_volume(self, aggregator):
        """One report gives full share but only 1/5 of the volume factor."""
        estimate = aggregator.aggregate("rajiv-chowk", [report("heavy")], NOW)

        assert estimate.level == CrowdLevel.HIGH
        assert estimate.confidence == 20
        assert estimate.report_count == 1
        assert estimate.last_updated == NOW
        assert estimate.distribution == {"low": 0, "moderate": 0, "high": 100}

    def test_confidence_saturates(self, aggregator):
        reports = [report("high", minutes_ago=i, report_id=f"r{i}") for i in range(6)]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)

        assert estimate.confidence == 100
        assert estimate.report_count == 6

    def test_tie_prefers_higher_level(self, aggregator):
        """Equal scores resolve high > moderate > low."""
        reports = [
            report("moderate", minutes_ago=5, report_id="b"),
            report("low", minutes_ago=5, report_id="a"),
        ]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)

        assert estimate.level == CrowdLevel.MODERATE
        assert estimate.distribution == {"low": 50, "moderate": 50, "high": 0}

    def test_tie_between_high_and_moderate_resolves_high(self, aggregator):
        reports = [
            report("high", minutes_ago=30, report_id="a"),
            report("moderate", minutes_ago=30, report_id="b"),
        ]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)

        assert estimate.level == CrowdLevel.HIGH
        assert estimate.distribution == {"low": 0, "moderate": 50, "high": 50}

    def test_likes_increase_weight(self, aggregator):
        """A well-liked low report outweighs an unliked high one of the same age."""
        reports = [
            report("high", minutes_ago=30, report_id="a"),
            report("low", minutes_ago=30, likes=10, report_id="b"),
        ]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)
        assert estimate.level == CrowdLevel.LOW

    def test_older_reports_weigh_less(self, aggregator):
        reports = [report("high", minutes_ago=11), report("low", minutes_ago=60)]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)
        assert estimate.level == CrowdLevel.HIGH

    def test_recent_boost_applies_inside_narrow_window(self, aggregator):
        inside = aggregator.report_weight(report("low", minutes_ago=10), NOW)
        outside = aggregator.report_weight(report("low", minutes_ago=11), NOW)
        assert inside > 3 * outside

    def test_recency_override_forces_high(self, aggregator):
        """Newest report high and weighted mean >= 2.0 forces high."""
        reports = [
            report("high", minutes_ago=0, report_id="h"),
            report("moderate", minutes_ago=1, report_id="m1"),
            report("moderate", minutes_ago=1, report_id="m2"),
        ]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)

        assert estimate.distribution["moderate"] > estimate.distribution["high"]
        assert estimate.level == CrowdLevel.HIGH

    def test_no_override_when_newest_is_not_high(self, aggregator):
        reports = [
            report("high", minutes_ago=1, report_id="h"),
            report("moderate", minutes_ago=0, report_id="m1"),
            report("moderate", minutes_ago=0, report_id="m2"),
        ]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)
        assert estimate.level == CrowdLevel.MODERATE

    def test_no_override_below_threshold(self, aggregator):
        """Newest high report but a mostly-low window stays low."""
        reports = [report("high", minutes_ago=0, report_id="h")] + [
            report("low", minutes_ago=1, report_id=f"l{i}") for i in range(3)
        ]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)
        assert estimate.level == CrowdLevel.LOW

    def test_adding_high_report_never_lowers_high_share(self, aggregator):
        reports = [
            report("moderate", minutes_ago=20, report_id="a"),
            report("low", minutes_ago=5, report_id="b"),
            report("high", minutes_ago=40, report_id="c"),
        ]
        before = aggregator.aggregate("rajiv-chowk", reports, NOW)
        after = aggregator.aggregate("rajiv-chowk", reports + [report("high", minutes_ago=3, report_id="d")], NOW)

        assert after.distribution["high"] >= before.distribution["high"]
        assert after.level.ordinal >= before.level.ordinal

    def test_result_independent_of_input_order(self, aggregator):
        reports = [
            report(level, minutes_ago=m, report_id=f"r{m}")
            for level, m in [("low", 2), ("high", 15), ("moderate", 30), ("high", 50), ("low", 90)]
        ]
        shuffled = list(reports)
        random.Random(7).shuffle(shuffled)

        assert aggregator.aggregate("rajiv-chowk", reports, NOW) == aggregator.aggregate("rajiv-chowk", shuffled, NOW)

    def test_report_limit_keeps_newest(self):
        profile = AggregationProfile(
            name="station", window_minutes=60, recent_window_minutes=10, decay_minutes=20, report_limit=2,
        )
        aggregator = CrowdAggregator(profile)
        reports = [
            report("low", minutes_ago=1, report_id="a"),
            report("low", minutes_ago=2, report_id="b"),
            report("high", minutes_ago=3, report_id="c"),
        ]
        estimate = aggregator.aggregate("rajiv-chowk", reports, NOW)

        assert estimate.report_count == 2
        assert estimate.distribution["high"] == 0


class TestAggregationProfile:
    """Tests for profile construction."""

    def test_profiles_from_settings(self):
        crowd = CrowdSettings()
        map_profile = AggregationProfile.map_view(crowd)
        station_profile = AggregationProfile.station_view(crowd)

        assert (map_profile.window_minutes, map_profile.decay_minutes, map_profile.report_limit) == (120, 60, None)
        assert (station_profile.window_minutes, station_profile.decay_minutes, station_profile.report_limit) == (60, 20, 10)

    def test_invalid_decay_rejected(self):
        with pytest.raises(ValueError):
            AggregationProfile(name="x", window_minutes=60, recent_window_minutes=10, decay_minutes=0)


class TestCrowdLevelVocabulary:
    """Tests for input label normalization."""

    @pytest.mark.parametrize("label,expected", [
        ("low", CrowdLevel.LOW),
        ("Light", CrowdLevel.LOW),
        ("moderate", CrowdLevel.MODERATE),
        ("MEDIUM", CrowdLevel.MODERATE),
        ("heavy", CrowdLevel.HIGH),
        (" high ", CrowdLevel.HIGH),
    ])
    def test_synonyms(self, label, expected):
        assert CrowdLevel.normalize(label) == expected

    def test_unknown_label(self):
        with pytest.raises(InvalidCrowdLevelError):
            CrowdLevel.normalize("packed")

    def test_unknown_label_is_value_error(self):
        with pytest.raises(ValueError):
            CrowdLevel.normalize("")
