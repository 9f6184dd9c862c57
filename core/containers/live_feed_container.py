from dependency_injector import containers, providers

from src.metro_bc.live.domain.publisher import LiveFeedPublisher
from src.metro_bc.live.infrastructure.websocket_emitter import WebSocketRoomEmitter


class LiveFeedContainer(containers.DeclarativeContainer):
    """Application-wide live feed transport.

    Override `emitter` to swap the transport (tests use a recording emitter).
    """

    emitter = providers.Singleton(WebSocketRoomEmitter)

    publisher = providers.Singleton(LiveFeedPublisher, emitter=emitter)


# Created once by the app; handed to request handlers through dependencies
live_feed_container = LiveFeedContainer()
