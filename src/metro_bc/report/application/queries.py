from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List

from src.framework.application import Query, QueryHandler
from src.metro_bc.report.domain.entities import Report, ReportFilter
from src.metro_bc.report.infrastructure.repositories import ReportRepository

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ListReportsQuery(Query):
    report_filter: ReportFilter


@dataclass(frozen=True)
class GetStationReportsQuery(Query):
    station_id: str
    limit: int = 10


class ListReportsQueryHandler(QueryHandler[ListReportsQuery, List[Report]]):
    def __init__(self, report_repository: ReportRepository):
        self.report_repository = report_repository

    def handle(self, query: ListReportsQuery) -> List[Report]:
        return self.report_repository.list_reports(query.report_filter)


class GetStationReportsQueryHandler(QueryHandler[GetStationReportsQuery, List[Report]]):
    """Newest reports for an exact station id, regardless of age."""

    def __init__(self, report_repository: ReportRepository):
        self.report_repository = report_repository

    def handle(self, query: GetStationReportsQuery) -> List[Report]:
        return self.report_repository.find_recent(
            [query.station_id],
            since=_EPOCH,
            limit=query.limit,
        )
