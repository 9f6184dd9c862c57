from .metro_container import MetroContainer
from .live_feed_container import LiveFeedContainer, live_feed_container

__all__ = ["MetroContainer", "LiveFeedContainer", "live_feed_container"]
