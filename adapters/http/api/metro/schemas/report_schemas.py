"""Community crowd report schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from src.metro_bc.report.domain.entities import Report
from src.metro_bc.shared.domain.clock import time_ago


class CreateReportRequest(BaseModel):
    """Request to submit a crowd report.

    `level` accepts low/moderate/high and the synonyms light, medium and heavy.
    """
    station: str = Field(..., min_length=1, description="Station identifier")
    level: str = Field(..., min_length=1)
    remarks: Optional[str] = Field("", max_length=500)
    user_id: str = Field(..., min_length=1)
    photo: Optional[str] = None  # URL, stored as given


class ReportResponse(BaseModel):
    id: str
    station: str
    level: str
    remarks: str
    user_id: str
    likes: int
    verified: bool
    photo: Optional[str] = None
    created_at: datetime
    time_ago: str

    @classmethod
    def from_entity(cls, report: Report, now: Optional[datetime] = None) -> "ReportResponse":
        return cls(
            id=report.id,
            station=report.station_id,
            level=report.level.value,
            remarks=report.remarks,
            user_id=report.user_id,
            likes=report.likes,
            verified=report.verified,
            photo=report.photo,
            created_at=report.created_at,
            time_ago=time_ago(report.created_at, now),
        )


class LikeResponse(BaseModel):
    id: str
    likes: int


class ReportSummaryResponse(BaseModel):
    """Latest report of one station."""
    station: str
    level: str
    remarks: str
    last_update: datetime
    time_ago: str
    report_count: int
