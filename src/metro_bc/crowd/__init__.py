"""Crowd level estimation from community reports."""

from .aggregator import (
    AggregationProfile,
    CrowdAggregator,
    CrowdEstimate,
    credibility_weight,
    time_weight,
)
from .trends import HourlyTrend, hourly_trends
from .crowd_service import CrowdService, StationCrowd, StationDetails, CrowdStatistics

__all__ = [
    "AggregationProfile",
    "CrowdAggregator",
    "CrowdEstimate",
    "credibility_weight",
    "time_weight",
    "HourlyTrend",
    "hourly_trends",
    "CrowdService",
    "StationCrowd",
    "StationDetails",
    "CrowdStatistics",
]
