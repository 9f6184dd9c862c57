"""API schemas for metro endpoints."""

from .route_schemas import ShortestRouteRequest, ShortestRouteResponse

from .report_schemas import (
    CreateReportRequest,
    ReportResponse,
    LikeResponse,
    ReportSummaryResponse,
)

from .station_schemas import (
    StationResponse,
    CrowdEstimateResponse,
    StationCrowdResponse,
    StationDetailsResponse,
    CrowdStatisticsResponse,
    HourlyTrendResponse,
)

__all__ = [
    "ShortestRouteRequest",
    "ShortestRouteResponse",
    "CreateReportRequest",
    "ReportResponse",
    "LikeResponse",
    "ReportSummaryResponse",
    "StationResponse",
    "CrowdEstimateResponse",
    "StationCrowdResponse",
    "StationDetailsResponse",
    "CrowdStatisticsResponse",
    "HourlyTrendResponse",
]
