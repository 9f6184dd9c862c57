import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, Index

from core.base import Base
from src.metro_bc.report.domain.entities import CrowdLevel, Report
from src.metro_bc.shared.domain.clock import ensure_utc


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CrowdReportModel(Base):
    """SQLAlchemy model for a community crowd report."""

    __tablename__ = "crowd_reports"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    station_id = Column(String(100), nullable=False)  # Station slug, no FK
    level = Column(String(20), nullable=False)
    remarks = Column(Text, nullable=False, default="")
    user_id = Column(String(100), nullable=False)
    photo = Column(String(500), nullable=True)
    likes = Column(Integer, nullable=False, default=0)
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now, onupdate=_utc_now)

    __table_args__ = (
        Index("ix_crowd_reports_station_created", "station_id", "created_at"),
        Index("ix_crowd_reports_created", "created_at"),
    )

    def to_entity(self) -> Report:
        return Report(
            id=self.id,
            station_id=self.station_id,
            level=CrowdLevel.normalize(self.level),
            user_id=self.user_id,
            created_at=ensure_utc(self.created_at),
            remarks=self.remarks or "",
            likes=self.likes or 0,
            verified=bool(self.verified),
            photo=self.photo,
        )
