"""Hourly crowd trends for a station over the last 24 hours."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

from src.metro_bc.report.domain.entities import CrowdLevel, Report
from src.metro_bc.shared.domain.clock import ensure_utc

TREND_WINDOW_HOURS = 24


@dataclass
class HourlyTrend:
    hour: int  # UTC hour of day, 0-23
    level: Optional[CrowdLevel] = None
    counts: Dict[str, int] = field(default_factory=lambda: {lvl.value: 0 for lvl in CrowdLevel})
    total: int = 0


def dominant_level(counts: Dict[str, int]) -> CrowdLevel:
    """Majority level of an hour; high and moderate need a strict lead."""
    low = counts[CrowdLevel.LOW.value]
    moderate = counts[CrowdLevel.MODERATE.value]
    high = counts[CrowdLevel.HIGH.value]

    if high > moderate and high > low:
        return CrowdLevel.HIGH
    if moderate > low:
        return CrowdLevel.MODERATE
    return CrowdLevel.LOW


def trend_window_start(now: datetime) -> datetime:
    return ensure_utc(now) - timedelta(hours=TREND_WINDOW_HOURS)


def hourly_trends(reports: Iterable[Report], now: datetime) -> List[HourlyTrend]:
    """Bucket the last 24 hours of reports by hour of day.

    Hours without reports keep level None.
    """
    start = trend_window_start(now)
    buckets = [HourlyTrend(hour=hour) for hour in range(24)]

    for report in reports:
        created_at = ensure_utc(report.created_at)
        if created_at < start:
            continue
        bucket = buckets[created_at.hour]
        bucket.counts[report.level.value] += 1
        bucket.total += 1

    for bucket in buckets:
        if bucket.total:
            bucket.level = dominant_level(bucket.counts)

    return buckets
