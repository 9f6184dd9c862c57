"""Station and live crowd API endpoints."""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request

from adapters.http.api.metro.dependencies import get_query_bus, to_http_exception
from adapters.http.api.metro.schemas import (
    CrowdEstimateResponse,
    CrowdStatisticsResponse,
    HourlyTrendResponse,
    ReportResponse,
    StationCrowdResponse,
    StationDetailsResponse,
    StationResponse,
)
from core.config import settings
from core.rate_limiter import limiter, RateLimits
from src.framework.application import QueryBus
from src.metro_bc.crowd.application.queries import (
    GetCrowdStatisticsQuery,
    GetLiveMapQuery,
    GetNearbyStationsQuery,
    GetStationDetailsQuery,
    GetStationTrendsQuery,
)
from src.metro_bc.crowd.crowd_service import StationCrowd
from src.metro_bc.report.application.queries import GetStationReportsQuery
from src.metro_bc.shared.domain.clock import utc_now
from src.metro_bc.shared.domain.exceptions import MetroError
from src.metro_bc.station.application.queries import GetStationQuery, ListStationsQuery

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stations", tags=["stations"])


def _station_crowd_response(item: StationCrowd) -> StationCrowdResponse:
    base = StationResponse.from_entity(item.station)
    return StationCrowdResponse(
        **base.model_dump(),
        crowd=CrowdEstimateResponse.from_estimate(item.estimate),
        distance_meters=item.distance_meters,
    )


@router.get("", response_model=List[StationResponse])
def list_stations(query_bus: QueryBus = Depends(get_query_bus)):
    """All stations of the network."""
    stations = query_bus.query(ListStationsQuery())
    return [StationResponse.from_entity(s) for s in stations]


# /live/* routes are declared before /{station_id} so they are not captured by it

@router.get("/live/all", response_model=List[StationCrowdResponse])
@limiter.limit(RateLimits.LIVE_VIEWS)
def get_live_map(request: Request, query_bus: QueryBus = Depends(get_query_bus)):
    """Every station with its current crowd estimate (map view)."""
    items = query_bus.query(GetLiveMapQuery())
    return [_station_crowd_response(item) for item in items]


@router.get("/live/stats", response_model=CrowdStatisticsResponse)
@limiter.limit(RateLimits.LIVE_VIEWS)
def get_crowd_statistics(request: Request, query_bus: QueryBus = Depends(get_query_bus)):
    """Station counts per crowd level and active report volume."""
    stats = query_bus.query(GetCrowdStatisticsQuery())
    return CrowdStatisticsResponse(
        total_stations=stats.total_stations,
        stations_with_data=stats.stations_with_data,
        active_reports=stats.active_reports,
        stations_by_level=stats.stations_by_level,
    )


@router.get("/live/nearby", response_model=List[StationCrowdResponse])
@limiter.limit(RateLimits.LIVE_VIEWS)
def get_nearby_stations(
    request: Request,
    longitude: float = Query(..., ge=-180, le=180),
    latitude: float = Query(..., ge=-90, le=90),
    max_distance: float = Query(settings.NEARBY_MAX_DISTANCE_M, gt=0, description="Radius in meters"),
    limit: int = Query(settings.NEARBY_LIMIT, ge=1, le=50),
    query_bus: QueryBus = Depends(get_query_bus),
):
    """Stations near a point, nearest first, with crowd estimates."""
    items = query_bus.query(
        GetNearbyStationsQuery(
            longitude=longitude,
            latitude=latitude,
            max_distance_m=max_distance,
            limit=limit,
        )
    )
    return [_station_crowd_response(item) for item in items]


@router.get("/{station_id}", response_model=StationResponse)
def get_station(station_id: str, query_bus: QueryBus = Depends(get_query_bus)):
    try:
        station = query_bus.query(GetStationQuery(station_id=station_id))
    except MetroError as e:
        raise to_http_exception(e)
    return StationResponse.from_entity(station)


@router.get("/{station_id}/live", response_model=StationDetailsResponse)
@limiter.limit(RateLimits.LIVE_VIEWS)
def get_station_live(request: Request, station_id: str, query_bus: QueryBus = Depends(get_query_bus)):
    """Current status of one station with its most recent reports."""
    try:
        details = query_bus.query(GetStationDetailsQuery(station_id=station_id))
    except MetroError as e:
        raise to_http_exception(e)

    now = utc_now()
    return StationDetailsResponse(
        station=StationResponse.from_entity(details.station),
        crowd=CrowdEstimateResponse.from_estimate(details.estimate),
        recent_reports=[ReportResponse.from_entity(r, now) for r in details.recent_reports],
        total_reports_last_hour=details.total_reports_last_hour,
    )


@router.get("/{station_id}/trends", response_model=List[HourlyTrendResponse])
def get_station_trends(station_id: str, query_bus: QueryBus = Depends(get_query_bus)):
    """Dominant crowd level per UTC hour over the last 24 hours."""
    try:
        trends = query_bus.query(GetStationTrendsQuery(station_id=station_id))
    except MetroError as e:
        raise to_http_exception(e)

    return [
        HourlyTrendResponse(
            hour=t.hour,
            level=t.level.value if t.level else None,
            counts=t.counts,
            total=t.total,
        )
        for t in trends
    ]


@router.get("/{station_id}/reports", response_model=List[ReportResponse])
def get_station_reports(
    station_id: str,
    limit: int = Query(10, ge=1, le=100),
    query_bus: QueryBus = Depends(get_query_bus),
):
    now = utc_now()
    reports = query_bus.query(GetStationReportsQuery(station_id=station_id, limit=limit))
    return [ReportResponse.from_entity(r, now) for r in reports]
