"""Community crowd report API endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, Response

from adapters.http.api.metro.dependencies import (
    get_command_bus,
    get_live_feed_publisher,
    get_query_bus,
    to_http_exception,
)
from adapters.http.api.metro.schemas import (
    CreateReportRequest,
    LikeResponse,
    ReportResponse,
    ReportSummaryResponse,
)
from core.rate_limiter import limiter, RateLimits
from src.framework.application import CommandBus, QueryBus
from src.metro_bc.crowd.application.queries import GetCrowdSummaryQuery
from src.metro_bc.live.domain.publisher import LiveFeedPublisher
from src.metro_bc.report.application.commands import (
    DeleteReportCommand,
    LikeReportCommand,
    SubmitReportCommand,
)
from src.metro_bc.report.application.queries import GetStationReportsQuery, ListReportsQuery
from src.metro_bc.report.domain.entities import CrowdLevel, ReportFilter, ReportSort
from src.metro_bc.shared.domain.clock import time_ago, utc_now
from src.metro_bc.shared.domain.exceptions import MetroError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=201)
@limiter.limit(RateLimits.REPORT_SUBMIT)
def submit_report(
    request: Request,
    body: CreateReportRequest,
    background_tasks: BackgroundTasks,
    command_bus: CommandBus = Depends(get_command_bus),
    publisher: LiveFeedPublisher = Depends(get_live_feed_publisher),
):
    """Submit a crowd report for a station.

    The station's live subscribers and the map view are notified after the
    report is stored; delivery failures never fail the request.
    """
    try:
        result = command_bus.dispatch(
            SubmitReportCommand(
                station_id=body.station,
                level=body.level,
                user_id=body.user_id,
                remarks=body.remarks or "",
                photo=body.photo,
            )
        )
    except MetroError as e:
        raise to_http_exception(e)

    background_tasks.add_task(publisher.publish, result.events)
    return ReportResponse.from_entity(result.report)


@router.get("", response_model=List[ReportResponse])
def list_reports(
    station: Optional[str] = Query(None, description="Station id (substring, case-insensitive)"),
    level: Optional[str] = Query(None, description="low, moderate or high"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    sort: ReportSort = Query(ReportSort.NEWEST),
    query_bus: QueryBus = Depends(get_query_bus),
):
    """List reports, newest first by default."""
    try:
        report_filter = ReportFilter(
            station_id=station or None,
            level=CrowdLevel.normalize(level) if level else None,
            page=page,
            limit=limit,
            sort=sort,
        )
    except MetroError as e:
        raise to_http_exception(e)

    now = utc_now()
    reports = query_bus.query(ListReportsQuery(report_filter=report_filter))
    return [ReportResponse.from_entity(r, now) for r in reports]


@router.get("/summary", response_model=List[ReportSummaryResponse])
def get_reports_summary(query_bus: QueryBus = Depends(get_query_bus)):
    """Latest report of every station, newest first."""
    now = utc_now()
    rows = query_bus.query(GetCrowdSummaryQuery())
    return [
        ReportSummaryResponse(
            station=report.station_id,
            level=report.level.value,
            remarks=report.remarks,
            last_update=report.created_at,
            time_ago=time_ago(report.created_at, now),
            report_count=count,
        )
        for report, count in rows
    ]


@router.get("/station/{station_id}", response_model=List[ReportResponse])
def get_reports_by_station(
    station_id: str,
    limit: int = Query(10, ge=1, le=100),
    query_bus: QueryBus = Depends(get_query_bus),
):
    """Most recent reports of one station."""
    now = utc_now()
    reports = query_bus.query(GetStationReportsQuery(station_id=station_id, limit=limit))
    return [ReportResponse.from_entity(r, now) for r in reports]


@router.post("/{report_id}/like", response_model=LikeResponse)
@limiter.limit(RateLimits.REPORT_LIKE)
def like_report(
    request: Request,
    report_id: str,
    background_tasks: BackgroundTasks,
    command_bus: CommandBus = Depends(get_command_bus),
    publisher: LiveFeedPublisher = Depends(get_live_feed_publisher),
):
    """Add one like to a report."""
    try:
        result = command_bus.dispatch(LikeReportCommand(report_id=report_id))
    except MetroError as e:
        raise to_http_exception(e)

    background_tasks.add_task(publisher.publish, result.events)
    return LikeResponse(id=result.report.id, likes=result.report.likes)


@router.delete("/{report_id}", status_code=204)
def delete_report(
    report_id: str,
    user_id: str = Query(..., min_length=1, description="Owner of the report"),
    command_bus: CommandBus = Depends(get_command_bus),
):
    """Delete a report. Only its owner may delete it."""
    try:
        command_bus.dispatch(DeleteReportCommand(report_id=report_id, user_id=user_id))
    except MetroError as e:
        raise to_http_exception(e)

    return Response(status_code=204)
