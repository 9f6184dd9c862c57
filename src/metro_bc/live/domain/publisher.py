"""Live feed events for report activity.

A new report notifies its station room and the map-view room; a like
notifies the station room. Each emission is independent, and a failed
emission is logged and dropped because the report is already stored.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from src.metro_bc.crowd.aggregator import CrowdEstimate
from src.metro_bc.live.domain.emitter import LiveFeedEmitter, MAP_ROOM, station_room
from src.metro_bc.report.domain.entities import Report
from src.metro_bc.shared.domain.clock import utc_now

logger = logging.getLogger(__name__)

NEW_REPORT = "new-report"
STATION_UPDATE = "station-update"
REPORT_LIKED = "report-liked"


@dataclass(frozen=True)
class LiveEvent:
    room: str
    event: str
    payload: dict


def report_payload(report: Report) -> dict:
    return {
        "id": report.id,
        "station": report.station_id,
        "level": report.level.value,
        "remarks": report.remarks,
        "user_id": report.user_id,
        "likes": report.likes,
        "created_at": report.created_at.isoformat(),
    }


class LiveFeedPublisher:
    """Builds live events and delivers them through an injected emitter."""

    def __init__(self, emitter: LiveFeedEmitter):
        self.emitter = emitter

    def report_created(
        self,
        report: Report,
        estimate: CrowdEstimate,
        timestamp: Optional[datetime] = None,
    ) -> List[LiveEvent]:
        timestamp = (timestamp or utc_now()).isoformat()
        crowd = {
            "crowd_level": estimate.level.value,
            "crowd_confidence": estimate.confidence,
            "report_count": estimate.report_count,
            "timestamp": timestamp,
        }
        return [
            LiveEvent(
                room=station_room(report.station_id),
                event=NEW_REPORT,
                payload={"report": report_payload(report), **crowd},
            ),
            LiveEvent(
                room=MAP_ROOM,
                event=STATION_UPDATE,
                payload={"station_id": report.station_id, **crowd},
            ),
        ]

    def report_liked(self, report: Report, timestamp: Optional[datetime] = None) -> List[LiveEvent]:
        return [
            LiveEvent(
                room=station_room(report.station_id),
                event=REPORT_LIKED,
                payload={
                    "station_id": report.station_id,
                    "report_id": report.id,
                    "likes": report.likes,
                    "timestamp": (timestamp or utc_now()).isoformat(),
                },
            )
        ]

    async def _deliver(self, event: LiveEvent) -> bool:
        try:
            await self.emitter.emit(event.room, event.event, event.payload)
            return True
        except Exception as e:
            logger.error(f"Live feed emit '{event.event}' to {event.room} failed: {e}")
            return False

    async def publish(self, events: List[LiveEvent]) -> int:
        """Deliver events concurrently; returns how many succeeded."""
        if not events:
            return 0
        results = await asyncio.gather(*(self._deliver(event) for event in events))
        return sum(1 for ok in results if ok)
