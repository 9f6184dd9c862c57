from abc import ABC, abstractmethod

MAP_ROOM = "map-view"


def station_room(station_id: str) -> str:
    return f"station-{station_id}"


class LiveFeedEmitter(ABC):
    """Pushes an event to every subscriber of a room.

    Implementations own subscriptions and sockets; callers only name the room.
    """

    @abstractmethod
    async def emit(self, room: str, event: str, payload: dict) -> None:
        pass
