from dataclasses import dataclass

from src.framework.application import Query, QueryHandler
from src.metro_bc.routing.routing_service import RouteResult, RoutingService


@dataclass(frozen=True)
class FindShortestRouteQuery(Query):
    origin_name: str
    destination_name: str


class FindShortestRouteQueryHandler(QueryHandler[FindShortestRouteQuery, RouteResult]):
    def __init__(self, routing_service: RoutingService):
        self.routing_service = routing_service

    def handle(self, query: FindShortestRouteQuery) -> RouteResult:
        return self.routing_service.find_route(query.origin_name, query.destination_name)
