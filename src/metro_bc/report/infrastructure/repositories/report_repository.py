import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from core.database import BaseRepository
from src.metro_bc.report.domain.entities import CrowdLevel, Report, ReportFilter, ReportSort
from src.metro_bc.report.infrastructure.models import CrowdReportModel
from src.metro_bc.shared.domain.clock import utc_now

logger = logging.getLogger(__name__)


class ReportRepository(BaseRepository[CrowdReportModel]):
    """Persistence for crowd reports.

    find_recent() is the windowed read the aggregator depends on.
    """

    def __init__(self, session: Session):
        super().__init__(session, CrowdReportModel)

    def add(
        self,
        station_id: str,
        level: CrowdLevel,
        user_id: str,
        remarks: str = "",
        photo: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Report:
        model = CrowdReportModel(
            station_id=station_id,
            level=level.value,
            remarks=remarks or "",
            user_id=user_id,
            photo=photo,
            created_at=created_at or utc_now(),
        )
        return self.create(model).to_entity()

    def get_report(self, report_id: str) -> Optional[Report]:
        model = self.get_by_id(report_id)
        return model.to_entity() if model else None

    def find_recent(
        self,
        station_ids: Optional[Iterable[str]],
        since: datetime,
        limit: Optional[int] = None,
    ) -> List[Report]:
        """Reports created at or after `since`, newest first.

        Args:
            station_ids: Stations to include, or None for all stations
            since: Start of the trailing window
            limit: Optional cap on the number of reports
        """
        query = self.session.query(CrowdReportModel).filter(
            CrowdReportModel.created_at >= since
        )
        if station_ids is not None:
            station_ids = list(station_ids)
            if not station_ids:
                return []
            query = query.filter(CrowdReportModel.station_id.in_(station_ids))

        query = query.order_by(CrowdReportModel.created_at.desc())
        if limit is not None:
            query = query.limit(limit)

        return [m.to_entity() for m in query.all()]

    def count_since(self, station_id: str, since: datetime) -> int:
        return (
            self.session.query(func.count(CrowdReportModel.id))
            .filter(CrowdReportModel.station_id == station_id)
            .filter(CrowdReportModel.created_at >= since)
            .scalar()
        )

    def list_reports(self, report_filter: ReportFilter) -> List[Report]:
        query = self.session.query(CrowdReportModel)

        if report_filter.station_id:
            query = query.filter(
                CrowdReportModel.station_id.icontains(report_filter.station_id, autoescape=True)
            )
        if report_filter.level:
            query = query.filter(CrowdReportModel.level == report_filter.level.value)

        if report_filter.sort == ReportSort.OLDEST:
            query = query.order_by(CrowdReportModel.created_at.asc())
        elif report_filter.sort == ReportSort.MOST_LIKED:
            query = query.order_by(CrowdReportModel.likes.desc(), CrowdReportModel.created_at.desc())
        else:
            query = query.order_by(CrowdReportModel.created_at.desc())

        models = query.offset(report_filter.offset).limit(report_filter.limit).all()
        return [m.to_entity() for m in models]

    def increment_likes(self, report_id: str) -> Optional[Report]:
        """Atomically add one like; returns the updated report."""
        updated = (
            self.session.query(CrowdReportModel)
            .filter(CrowdReportModel.id == report_id)
            .update(
                {CrowdReportModel.likes: CrowdReportModel.likes + 1},
                synchronize_session=False,
            )
        )
        if not updated:
            return None
        self.session.commit()

        model = self.get_by_id(report_id)
        self.session.refresh(model)
        return model.to_entity()

    def latest_per_station(self) -> List[Tuple[Report, int]]:
        """Most recent report of every station with the station's report count."""
        latest = (
            self.session.query(
                CrowdReportModel.station_id.label("station_id"),
                func.max(CrowdReportModel.created_at).label("last_created"),
                func.count(CrowdReportModel.id).label("report_count"),
            )
            .group_by(CrowdReportModel.station_id)
            .subquery()
        )

        rows = (
            self.session.query(CrowdReportModel, latest.c.report_count)
            .join(
                latest,
                and_(
                    CrowdReportModel.station_id == latest.c.station_id,
                    CrowdReportModel.created_at == latest.c.last_created,
                ),
            )
            .order_by(CrowdReportModel.created_at.desc())
            .all()
        )

        results = []
        seen = set()
        for model, report_count in rows:
            # Two reports can share the latest timestamp
            if model.station_id in seen:
                continue
            seen.add(model.station_id)
            results.append((model.to_entity(), int(report_count)))
        return results
