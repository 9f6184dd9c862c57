from dataclasses import dataclass
from typing import List, Tuple

from src.framework.application import Query, QueryHandler
from src.metro_bc.crowd.crowd_service import (
    CrowdService,
    CrowdStatistics,
    StationCrowd,
    StationDetails,
)
from src.metro_bc.crowd.trends import HourlyTrend
from src.metro_bc.report.domain.entities import Report


@dataclass(frozen=True)
class GetLiveMapQuery(Query):
    pass


@dataclass(frozen=True)
class GetStationDetailsQuery(Query):
    station_id: str


@dataclass(frozen=True)
class GetNearbyStationsQuery(Query):
    longitude: float
    latitude: float
    max_distance_m: float
    limit: int


@dataclass(frozen=True)
class GetCrowdStatisticsQuery(Query):
    pass


@dataclass(frozen=True)
class GetStationTrendsQuery(Query):
    station_id: str


@dataclass(frozen=True)
class GetCrowdSummaryQuery(Query):
    pass


class _CrowdQueryHandler:
    def __init__(self, crowd_service: CrowdService):
        self.crowd_service = crowd_service


class GetLiveMapQueryHandler(_CrowdQueryHandler, QueryHandler[GetLiveMapQuery, List[StationCrowd]]):
    def handle(self, query: GetLiveMapQuery) -> List[StationCrowd]:
        return self.crowd_service.get_live_map()


class GetStationDetailsQueryHandler(_CrowdQueryHandler, QueryHandler[GetStationDetailsQuery, StationDetails]):
    def handle(self, query: GetStationDetailsQuery) -> StationDetails:
        return self.crowd_service.get_station_details(query.station_id)


class GetNearbyStationsQueryHandler(_CrowdQueryHandler, QueryHandler[GetNearbyStationsQuery, List[StationCrowd]]):
    def handle(self, query: GetNearbyStationsQuery) -> List[StationCrowd]:
        return self.crowd_service.get_nearby(
            longitude=query.longitude,
            latitude=query.latitude,
            max_distance_m=query.max_distance_m,
            limit=query.limit,
        )


class GetCrowdStatisticsQueryHandler(_CrowdQueryHandler, QueryHandler[GetCrowdStatisticsQuery, CrowdStatistics]):
    def handle(self, query: GetCrowdStatisticsQuery) -> CrowdStatistics:
        return self.crowd_service.get_statistics()


class GetStationTrendsQueryHandler(_CrowdQueryHandler, QueryHandler[GetStationTrendsQuery, List[HourlyTrend]]):
    def handle(self, query: GetStationTrendsQuery) -> List[HourlyTrend]:
        return self.crowd_service.get_trends(query.station_id)


class GetCrowdSummaryQueryHandler(_CrowdQueryHandler, QueryHandler[GetCrowdSummaryQuery, List[Tuple[Report, int]]]):
    def handle(self, query: GetCrowdSummaryQuery) -> List[Tuple[Report, int]]:
        return self.crowd_service.get_summary()
