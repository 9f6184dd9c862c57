"""Station and live crowd schemas."""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel

from src.metro_bc.crowd.aggregator import CrowdEstimate
from src.metro_bc.station.domain.entities import Station

from .report_schemas import ReportResponse


class StationResponse(BaseModel):
    station_id: str
    name: str
    longitude: float
    latitude: float
    lines: List[str] = []
    is_interchange: bool = False
    entry_count: Optional[int] = None

    @classmethod
    def from_entity(cls, station: Station) -> "StationResponse":
        return cls(
            station_id=station.station_id,
            name=station.name,
            longitude=station.longitude,
            latitude=station.latitude,
            lines=list(station.lines),
            is_interchange=station.is_interchange,
            entry_count=station.entry_count,
        )


class CrowdEstimateResponse(BaseModel):
    level: str  # low, moderate, high
    confidence: int  # 0-100
    report_count: int
    last_updated: Optional[datetime] = None
    distribution: Dict[str, int] = {}

    @classmethod
    def from_estimate(cls, estimate: CrowdEstimate) -> "CrowdEstimateResponse":
        return cls(
            level=estimate.level.value,
            confidence=estimate.confidence,
            report_count=estimate.report_count,
            last_updated=estimate.last_updated,
            distribution=dict(estimate.distribution),
        )


class StationCrowdResponse(StationResponse):
    """Station with its current crowd estimate."""
    crowd: CrowdEstimateResponse
    distance_meters: Optional[float] = None  # Only for nearby searches


class StationDetailsResponse(BaseModel):
    station: StationResponse
    crowd: CrowdEstimateResponse
    recent_reports: List[ReportResponse] = []
    total_reports_last_hour: int = 0


class CrowdStatisticsResponse(BaseModel):
    total_stations: int
    stations_with_data: int
    active_reports: int
    stations_by_level: Dict[str, int]


class HourlyTrendResponse(BaseModel):
    hour: int  # UTC hour of day
    level: Optional[str] = None  # None when the hour has no reports
    counts: Dict[str, int]
    total: int
