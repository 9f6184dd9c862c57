from dependency_injector import containers, providers

from src.metro_bc.crowd.aggregator import AggregationProfile, CrowdAggregator
from src.metro_bc.crowd.crowd_service import CrowdService
from src.metro_bc.edge.infrastructure.repositories import EdgeRepository
from src.metro_bc.report.infrastructure.repositories import ReportRepository
from src.metro_bc.routing.network_source import DatabaseNetworkDataSource, JsonNetworkDataSource
from src.metro_bc.routing.routing_service import RoutingService
from src.metro_bc.station.infrastructure.repositories import StationRepository

# Query Handlers
from src.metro_bc.routing.application.queries import FindShortestRouteQueryHandler
from src.metro_bc.station.application.queries import ListStationsQueryHandler, GetStationQueryHandler
from src.metro_bc.crowd.application.queries import (
    GetLiveMapQueryHandler,
    GetStationDetailsQueryHandler,
    GetNearbyStationsQueryHandler,
    GetCrowdStatisticsQueryHandler,
    GetStationTrendsQueryHandler,
    GetCrowdSummaryQueryHandler,
)
from src.metro_bc.report.application.queries import ListReportsQueryHandler, GetStationReportsQueryHandler

# Command Handlers
from src.metro_bc.report.application.commands import (
    SubmitReportCommandHandler,
    LikeReportCommandHandler,
    DeleteReportCommandHandler,
)


class MetroContainer(containers.DeclarativeContainer):
    """Dependency injection container for the metro bounded context.

    One instance per request, bound to that request's session.

    Handler naming convention for CommandBus/QueryBus:
    - SubmitReportCommand -> submit_report_command_handler
    - GetLiveMapQuery -> get_live_map_query_handler
    """

    # Injected per request
    session = providers.Dependency()
    config = providers.Dependency()
    publisher = providers.Dependency()

    # Repositories
    station_repository = providers.Factory(StationRepository, session=session)
    edge_repository = providers.Factory(EdgeRepository, session=session)
    report_repository = providers.Factory(ReportRepository, session=session)

    # Network dataset for the router
    network_data_source = providers.Selector(
        config.provided.NETWORK_DATA_SOURCE,
        json=providers.Factory(JsonNetworkDataSource, data_dir=config.provided.NETWORK_DATA_DIR),
        database=providers.Factory(
            DatabaseNetworkDataSource,
            station_repository=station_repository,
            edge_repository=edge_repository,
        ),
    )

    # Services
    routing_service = providers.Factory(RoutingService, data_source=network_data_source)

    map_aggregator = providers.Factory(
        CrowdAggregator,
        profile=providers.Factory(AggregationProfile.map_view, config.provided.crowd),
    )
    station_aggregator = providers.Factory(
        CrowdAggregator,
        profile=providers.Factory(AggregationProfile.station_view, config.provided.crowd),
    )

    crowd_service = providers.Factory(
        CrowdService,
        station_repository=station_repository,
        report_repository=report_repository,
        map_aggregator=map_aggregator,
        station_aggregator=station_aggregator,
    )

    # ===== Query Handlers =====
    find_shortest_route_query_handler = providers.Factory(
        FindShortestRouteQueryHandler,
        routing_service=routing_service,
    )

    list_stations_query_handler = providers.Factory(
        ListStationsQueryHandler,
        station_repository=station_repository,
    )

    get_station_query_handler = providers.Factory(
        GetStationQueryHandler,
        station_repository=station_repository,
    )

    get_live_map_query_handler = providers.Factory(GetLiveMapQueryHandler, crowd_service=crowd_service)
    get_station_details_query_handler = providers.Factory(GetStationDetailsQueryHandler, crowd_service=crowd_service)
    get_nearby_stations_query_handler = providers.Factory(GetNearbyStationsQueryHandler, crowd_service=crowd_service)
    get_crowd_statistics_query_handler = providers.Factory(GetCrowdStatisticsQueryHandler, crowd_service=crowd_service)
    get_station_trends_query_handler = providers.Factory(GetStationTrendsQueryHandler, crowd_service=crowd_service)
    get_crowd_summary_query_handler = providers.Factory(GetCrowdSummaryQueryHandler, crowd_service=crowd_service)

    list_reports_query_handler = providers.Factory(
        ListReportsQueryHandler,
        report_repository=report_repository,
    )

    get_station_reports_query_handler = providers.Factory(
        GetStationReportsQueryHandler,
        report_repository=report_repository,
    )

    # ===== Command Handlers =====
    submit_report_command_handler = providers.Factory(
        SubmitReportCommandHandler,
        report_repository=report_repository,
        crowd_service=crowd_service,
        publisher=publisher,
    )

    like_report_command_handler = providers.Factory(
        LikeReportCommandHandler,
        report_repository=report_repository,
        publisher=publisher,
    )

    delete_report_command_handler = providers.Factory(
        DeleteReportCommandHandler,
        report_repository=report_repository,
    )
