from .route_router import router as route_router
from .report_router import router as report_router
from .station_router import router as station_router
from .live_feed_router import router as live_feed_router

__all__ = ["route_router", "report_router", "station_router", "live_feed_router"]
