"""Crowd views consumed by the live map, station page and dashboards.

Every view is a pull: reports are read for the profile's window and run
through the aggregator at request time.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from src.metro_bc.crowd.aggregator import CrowdAggregator, CrowdEstimate
from src.metro_bc.crowd.trends import HourlyTrend, hourly_trends, trend_window_start
from src.metro_bc.report.domain.entities import CrowdLevel, Report
from src.metro_bc.report.infrastructure.repositories import ReportRepository
from src.metro_bc.station.domain.entities import Station
from src.metro_bc.station.infrastructure.repositories import StationRepository
from src.metro_bc.shared.domain.clock import utc_now
from src.metro_bc.shared.domain.exceptions import StationNotFoundError
from src.metro_bc.shared.domain.geo import GeoPoint

logger = logging.getLogger(__name__)

RECENT_REPORTS_SHOWN = 5


@dataclass(frozen=True)
class StationCrowd:
    station: Station
    estimate: CrowdEstimate
    distance_meters: Optional[float] = None


@dataclass(frozen=True)
class StationDetails:
    station: Station
    estimate: CrowdEstimate
    recent_reports: List[Report]
    total_reports_last_hour: int


@dataclass(frozen=True)
class CrowdStatistics:
    total_stations: int
    stations_with_data: int
    active_reports: int
    stations_by_level: Dict[str, int] = field(default_factory=dict)


class CrowdService:
    """Crowd estimates per station for the different consumer views."""

    def __init__(
        self,
        station_repository: StationRepository,
        report_repository: ReportRepository,
        map_aggregator: CrowdAggregator,
        station_aggregator: CrowdAggregator,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.station_repository = station_repository
        self.report_repository = report_repository
        self.map_aggregator = map_aggregator
        self.station_aggregator = station_aggregator
        self.clock = clock

    def _map_estimates(self, stations: List[Station], now: datetime) -> Dict[str, CrowdEstimate]:
        """One windowed query for all stations, grouped by station id."""
        since = self.map_aggregator.window_start(now)
        station_ids = [s.station_id for s in stations]
        reports = self.report_repository.find_recent(station_ids, since)

        reports_by_station: Dict[str, List[Report]] = defaultdict(list)
        for report in reports:
            reports_by_station[report.station_id].append(report)

        return {
            station_id: self.map_aggregator.aggregate(station_id, reports_by_station.get(station_id, []), now)
            for station_id in station_ids
        }

    def estimate_for_station(self, station_id: str, now: Optional[datetime] = None) -> CrowdEstimate:
        """Map-profile estimate for one station (used for live pushes)."""
        now = now or self.clock()
        since = self.map_aggregator.window_start(now)
        reports = self.report_repository.find_recent([station_id], since)
        return self.map_aggregator.aggregate(station_id, reports, now)

    def get_live_map(self) -> List[StationCrowd]:
        now = self.clock()
        stations = self.station_repository.list_stations()
        estimates = self._map_estimates(stations, now)

        with_data = sum(1 for e in estimates.values() if e.report_count)
        logger.info(f"Live map: {len(stations)} stations, {with_data} with recent reports")

        return [StationCrowd(station=s, estimate=estimates[s.station_id]) for s in stations]

    def get_station_details(self, station_id: str) -> StationDetails:
        """Current status of one station.

        Raises:
            StationNotFoundError: if the station is not in the dataset
        """
        station = self.station_repository.get_station(station_id)
        if station is None:
            raise StationNotFoundError(station_id)

        now = self.clock()
        reports = self.report_repository.find_recent(
            [station_id],
            self.station_aggregator.window_start(now),
            limit=self.station_aggregator.profile.report_limit,
        )
        estimate = self.station_aggregator.aggregate(station_id, reports, now)

        return StationDetails(
            station=station,
            estimate=estimate,
            recent_reports=reports[:RECENT_REPORTS_SHOWN],
            total_reports_last_hour=self.report_repository.count_since(
                station_id, now - timedelta(hours=1)
            ),
        )

    def get_nearby(
        self,
        longitude: float,
        latitude: float,
        max_distance_m: float,
        limit: int,
    ) -> List[StationCrowd]:
        """Stations within max_distance_m of a point, nearest first."""
        center = GeoPoint(longitude=longitude, latitude=latitude)

        candidates: List[Tuple[float, Station]] = []
        for station in self.station_repository.list_stations():
            distance = center.distance_to(GeoPoint(station.longitude, station.latitude))
            if distance <= max_distance_m:
                candidates.append((distance, station))

        candidates.sort(key=lambda item: (item[0], item[1].station_id))
        candidates = candidates[:limit]

        now = self.clock()
        estimates = self._map_estimates([s for _, s in candidates], now)
        return [
            StationCrowd(station=s, estimate=estimates[s.station_id], distance_meters=round(d, 1))
            for d, s in candidates
        ]

    def get_statistics(self) -> CrowdStatistics:
        live = self.get_live_map()

        by_level = {level.value: 0 for level in CrowdLevel}
        for item in live:
            by_level[item.estimate.level.value] += 1

        return CrowdStatistics(
            total_stations=len(live),
            stations_with_data=sum(1 for item in live if item.estimate.report_count),
            active_reports=sum(item.estimate.report_count for item in live),
            stations_by_level=by_level,
        )

    def get_trends(self, station_id: str) -> List[HourlyTrend]:
        """Hourly dominant level over the last 24 hours.

        Raises:
            StationNotFoundError: if the station is not in the dataset
        """
        if self.station_repository.get_station(station_id) is None:
            raise StationNotFoundError(station_id)

        now = self.clock()
        reports = self.report_repository.find_recent([station_id], trend_window_start(now))
        return hourly_trends(reports, now)

    def get_summary(self) -> List[Tuple[Report, int]]:
        """Latest report per station with the station's total report count."""
        return self.report_repository.latest_per_station()
