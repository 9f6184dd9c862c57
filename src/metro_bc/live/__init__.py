from .domain.emitter import LiveFeedEmitter, MAP_ROOM, station_room
from .domain.publisher import LiveEvent, LiveFeedPublisher

__all__ = ["LiveFeedEmitter", "MAP_ROOM", "station_room", "LiveEvent", "LiveFeedPublisher"]
