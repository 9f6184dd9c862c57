"""FastAPI dependencies wiring requests to the metro containers and buses."""

from dependency_injector import providers
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from core.config import settings
from core.containers import MetroContainer, live_feed_container
from core.database import get_db
from src.framework.application import CommandBus, QueryBus
from src.metro_bc.live.domain.publisher import LiveFeedPublisher
from src.metro_bc.live.infrastructure.websocket_emitter import WebSocketRoomEmitter
from src.metro_bc.shared.domain.exceptions import (
    InvalidCrowdLevelError,
    MetroError,
    NetworkIntegrityError,
    NoRouteError,
    ReportNotFoundError,
    ReportOwnershipError,
    StationNotFoundError,
)


def get_live_feed_publisher() -> LiveFeedPublisher:
    return live_feed_container.publisher()


def get_live_feed_emitter() -> WebSocketRoomEmitter:
    return live_feed_container.emitter()


def get_container(
    db: Session = Depends(get_db),
    publisher: LiveFeedPublisher = Depends(get_live_feed_publisher),
) -> MetroContainer:
    """Container bound to the request's database session."""
    return MetroContainer(
        session=providers.Object(db),
        config=providers.Object(settings),
        publisher=providers.Object(publisher),
    )


def get_query_bus(container: MetroContainer = Depends(get_container)) -> QueryBus:
    return QueryBus(container)


def get_command_bus(container: MetroContainer = Depends(get_container)) -> CommandBus:
    return CommandBus(container)


def to_http_exception(error: MetroError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    if isinstance(error, StationNotFoundError):
        return HTTPException(
            status_code=404,
            detail={"error": "station_not_found", "message": str(error), "stations": error.names},
        )
    if isinstance(error, NoRouteError):
        return HTTPException(status_code=404, detail={"error": "no_route", "message": str(error)})
    if isinstance(error, NetworkIntegrityError):
        return HTTPException(status_code=500, detail={"error": "network_integrity", "message": str(error)})
    if isinstance(error, InvalidCrowdLevelError):
        return HTTPException(status_code=422, detail={"error": "invalid_level", "message": str(error)})
    if isinstance(error, ReportNotFoundError):
        return HTTPException(status_code=404, detail={"error": "report_not_found", "message": str(error)})
    if isinstance(error, ReportOwnershipError):
        return HTTPException(status_code=403, detail={"error": "forbidden", "message": str(error)})
    return HTTPException(status_code=500, detail={"error": "internal", "message": str(error)})
