"""WebSocket transport for the live feed, with per-room subscriptions.

Rooms: "station-{station_id}" for one station, "map-view" for all stations.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Dict, List, Set

from fastapi import WebSocket

from src.metro_bc.live.domain.emitter import LiveFeedEmitter

logger = logging.getLogger(__name__)


class WebSocketRoomEmitter(LiveFeedEmitter):
    """Registry of connected sockets grouped by room."""

    def __init__(self):
        self._rooms: Dict[str, Set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def join(self, websocket: WebSocket, room: str) -> None:
        async with self._lock:
            self._rooms[room].add(websocket)
        logger.debug(f"Socket joined {room}")

    async def leave(self, websocket: WebSocket, room: str) -> None:
        async with self._lock:
            members = self._rooms.get(room)
            if members is not None:
                members.discard(websocket)
                if not members:
                    del self._rooms[room]
        logger.debug(f"Socket left {room}")

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            for room in list(self._rooms):
                self._rooms[room].discard(websocket)
                if not self._rooms[room]:
                    del self._rooms[room]

    def room_size(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def emit(self, room: str, event: str, payload: dict) -> None:
        async with self._lock:
            members: List[WebSocket] = list(self._rooms.get(room, ()))

        dead = []
        for websocket in members:
            try:
                await websocket.send_json({"event": event, "data": payload})
            except Exception as e:
                logger.warning(f"Dropping socket from {room} after send failure: {e}")
                dead.append(websocket)

        for websocket in dead:
            await self.disconnect(websocket)
