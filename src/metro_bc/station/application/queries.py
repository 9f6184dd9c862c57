from dataclasses import dataclass
from typing import List

from src.framework.application import Query, QueryHandler
from src.metro_bc.station.domain.entities import Station
from src.metro_bc.station.infrastructure.repositories import StationRepository
from src.metro_bc.shared.domain.exceptions import StationNotFoundError


@dataclass(frozen=True)
class ListStationsQuery(Query):
    pass


@dataclass(frozen=True)
class GetStationQuery(Query):
    station_id: str


class ListStationsQueryHandler(QueryHandler[ListStationsQuery, List[Station]]):
    def __init__(self, station_repository: StationRepository):
        self.station_repository = station_repository

    def handle(self, query: ListStationsQuery) -> List[Station]:
        return self.station_repository.list_stations()


class GetStationQueryHandler(QueryHandler[GetStationQuery, Station]):
    def __init__(self, station_repository: StationRepository):
        self.station_repository = station_repository

    def handle(self, query: GetStationQuery) -> Station:
        station = self.station_repository.get_station(query.station_id)
        if station is None:
            raise StationNotFoundError(query.station_id)
        return station
