"""Crowd level aggregation from community reports.

Each report in the trailing window contributes

    timeWeight        = exp(-ageMinutes / decay)
    credibilityWeight = 1 + log(likes + 1) * 0.3
    weight            = timeWeight * credibilityWeight

(times recent_boost inside the narrow "very recent" window) to the bucket of
its level. Buckets are normalized by the total weight; the greatest bucket
wins, ties resolving high > moderate > low. If the newest report is "high" and
the weighted ordinal mean (low=1, moderate=2, high=3) reaches the override
threshold, the result is forced to "high".

With no reports in the window the estimate is "low" with confidence 0.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from src.metro_bc.report.domain.entities import CrowdLevel, LEVEL_PRECEDENCE, Report
from src.metro_bc.shared.domain.clock import ensure_utc

CREDIBILITY_FACTOR = 0.3
DEFAULT_LEVEL = CrowdLevel.LOW


@dataclass(frozen=True)
class AggregationProfile:
    """Window widths and decay for one kind of consumer view."""
    name: str
    window_minutes: float
    recent_window_minutes: float
    decay_minutes: float
    report_limit: Optional[int] = None
    recent_boost: float = 4.0
    override_threshold: float = 2.0
    saturation_count: int = 5

    def __post_init__(self):
        if self.decay_minutes <= 0:
            raise ValueError("decay_minutes must be positive")
        if not 0 <= self.recent_window_minutes <= self.window_minutes:
            raise ValueError("recent window must lie inside the broad window")
        if self.saturation_count < 1:
            raise ValueError("saturation_count must be >= 1")

    @classmethod
    def map_view(cls, crowd_settings) -> "AggregationProfile":
        """Map overview / nearby / live push profile."""
        return cls(
            name="map",
            window_minutes=crowd_settings.MAP_WINDOW_MINUTES,
            recent_window_minutes=crowd_settings.MAP_RECENT_WINDOW_MINUTES,
            decay_minutes=crowd_settings.MAP_DECAY_MINUTES,
            recent_boost=crowd_settings.RECENT_BOOST,
            override_threshold=crowd_settings.OVERRIDE_THRESHOLD,
            saturation_count=crowd_settings.CONFIDENCE_SATURATION_COUNT,
        )

    @classmethod
    def station_view(cls, crowd_settings) -> "AggregationProfile":
        """Single-station current status profile (faster decay, capped)."""
        return cls(
            name="station",
            window_minutes=crowd_settings.STATION_WINDOW_MINUTES,
            recent_window_minutes=crowd_settings.STATION_RECENT_WINDOW_MINUTES,
            decay_minutes=crowd_settings.STATION_DECAY_MINUTES,
            report_limit=crowd_settings.STATION_REPORT_LIMIT,
            recent_boost=crowd_settings.RECENT_BOOST,
            override_threshold=crowd_settings.OVERRIDE_THRESHOLD,
            saturation_count=crowd_settings.CONFIDENCE_SATURATION_COUNT,
        )


@dataclass(frozen=True)
class CrowdEstimate:
    """Current best guess of a station's crowd level."""
    station_id: str
    level: CrowdLevel
    confidence: int  # 0-100
    report_count: int
    last_updated: Optional[datetime] = None
    distribution: Dict[str, int] = field(default_factory=dict)  # Percent per level

    @classmethod
    def empty(cls, station_id: str) -> "CrowdEstimate":
        return cls(
            station_id=station_id,
            level=DEFAULT_LEVEL,
            confidence=0,
            report_count=0,
            last_updated=None,
            distribution={level.value: 0 for level in CrowdLevel},
        )


def time_weight(age_minutes: float, decay_minutes: float) -> float:
    return math.exp(-max(age_minutes, 0.0) / decay_minutes)


def credibility_weight(likes: int) -> float:
    return 1 + math.log(max(likes, 0) + 1) * CREDIBILITY_FACTOR


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class CrowdAggregator:
    """Turns a station's reports into a CrowdEstimate.

    Pure: the result depends only on the reports and `now`.
    """

    def __init__(self, profile: AggregationProfile):
        self.profile = profile

    def window_start(self, now: datetime) -> datetime:
        return ensure_utc(now) - timedelta(minutes=self.profile.window_minutes)

    def select_reports(self, reports: Iterable[Report], now: datetime) -> List[Report]:
        """Reports inside the broad window, newest first, capped by report_limit."""
        start = self.window_start(now)
        in_window = [r for r in reports if ensure_utc(r.created_at) >= start]
        in_window.sort(key=lambda r: (ensure_utc(r.created_at), r.id), reverse=True)

        if self.profile.report_limit is not None:
            in_window = in_window[:self.profile.report_limit]
        return in_window

    def report_weight(self, report: Report, now: datetime) -> float:
        age_minutes = (ensure_utc(now) - ensure_utc(report.created_at)).total_seconds() / 60
        weight = time_weight(age_minutes, self.profile.decay_minutes) * credibility_weight(report.likes)
        if age_minutes <= self.profile.recent_window_minutes:
            weight *= self.profile.recent_boost
        return weight

    def aggregate(self, station_id: str, reports: Iterable[Report], now: datetime) -> CrowdEstimate:
        selected = self.select_reports(reports, now)
        if not selected:
            return CrowdEstimate.empty(station_id)

        scores: Dict[CrowdLevel, float] = {level: 0.0 for level in CrowdLevel}
        total_weight = 0.0
        for report in selected:
            weight = self.report_weight(report, now)
            scores[report.level] += weight
            total_weight += weight

        if total_weight > 0:
            scores = {level: score / total_weight for level, score in scores.items()}

        level = LEVEL_PRECEDENCE[0]
        for candidate in LEVEL_PRECEDENCE[1:]:
            if scores[candidate] > scores[level]:
                level = candidate

        # selected is sorted newest first
        most_recent = selected[0]
        ordinal_mean = sum(scores[lvl] * lvl.ordinal for lvl in CrowdLevel)
        if most_recent.level == CrowdLevel.HIGH and ordinal_mean >= self.profile.override_threshold:
            level = CrowdLevel.HIGH

        volume_factor = min(1.0, len(selected) / self.profile.saturation_count)
        confidence = min(100, _round_half_up(scores[level] * 100 * volume_factor))

        return CrowdEstimate(
            station_id=station_id,
            level=level,
            confidence=confidence,
            report_count=len(selected),
            last_updated=ensure_utc(most_recent.created_at),
            distribution={lvl.value: _round_half_up(scores[lvl] * 100) for lvl in CrowdLevel},
        )
