"""Live feed WebSocket endpoint.

Clients send JSON actions to manage their subscriptions:

    {"action": "join-station", "station_id": "rajiv-chowk"}
    {"action": "leave-station", "station_id": "rajiv-chowk"}
    {"action": "join-map"}
    {"action": "leave-map"}

and receive events as {"event": ..., "data": ...}.
"""
import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from adapters.http.api.metro.dependencies import get_live_feed_emitter
from src.metro_bc.live.domain.emitter import MAP_ROOM, station_room
from src.metro_bc.live.infrastructure.websocket_emitter import WebSocketRoomEmitter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


def _room_for(message: dict):
    """Returns (join?, room) for a client action, or None if invalid."""
    action = message.get("action")
    if action in ("join-map", "leave-map"):
        return action == "join-map", MAP_ROOM
    if action in ("join-station", "leave-station"):
        station_id = message.get("station_id")
        if not station_id or not isinstance(station_id, str):
            return None
        return action == "join-station", station_room(station_id)
    return None


@router.websocket("/ws/live")
async def live_feed(websocket: WebSocket, emitter: WebSocketRoomEmitter = Depends(get_live_feed_emitter)):
    await websocket.accept()
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                await websocket.send_json({"event": "error", "data": {"message": "Invalid JSON"}})
                continue

            action = _room_for(message) if isinstance(message, dict) else None
            if action is None:
                await websocket.send_json({"event": "error", "data": {"message": "Unknown action"}})
                continue

            join, room = action
            if join:
                await emitter.join(websocket, room)
                await websocket.send_json({"event": "joined", "data": {"room": room}})
            else:
                await emitter.leave(websocket, room)
                await websocket.send_json({"event": "left", "data": {"room": room}})
    except WebSocketDisconnect:
        logger.debug("Live feed socket disconnected")
    finally:
        await emitter.disconnect(websocket)
