"""Shortest route API endpoint."""
import logging

from fastapi import APIRouter, Depends, Request

from adapters.http.api.metro.dependencies import get_query_bus, to_http_exception
from adapters.http.api.metro.schemas import ShortestRouteRequest, ShortestRouteResponse
from core.rate_limiter import limiter, RateLimits
from src.framework.application import QueryBus
from src.metro_bc.routing.application.queries import FindShortestRouteQuery
from src.metro_bc.shared.domain.exceptions import MetroError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/shortest", response_model=ShortestRouteResponse)
@limiter.limit(RateLimits.ROUTE_PLANNER)
def shortest_route(
    request: Request,
    body: ShortestRouteRequest,
    query_bus: QueryBus = Depends(get_query_bus),
):
    """Minimum-weight route between two stations given by display name.

    Station names are matched case-insensitively.

    **Example request:**
    ```
    POST /routes/shortest
    {"from": "Rajiv Chowk", "to": "Kashmere Gate"}
    ```

    Returns 404 with `error=station_not_found` when a name is unknown and
    `error=no_route` when the stations are not connected.
    """
    try:
        result = query_bus.query(FindShortestRouteQuery(origin_name=body.from_, destination_name=body.to))
    except MetroError as e:
        raise to_http_exception(e)

    return ShortestRouteResponse(
        from_=result.origin_name,
        to=result.destination_name,
        path=result.path,
        station_ids=result.station_ids,
        distance=result.distance,
    )
