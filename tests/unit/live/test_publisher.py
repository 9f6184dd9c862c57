"""Unit tests for the live feed publisher and WebSocket room emitter."""

import asyncio
import logging
from datetime import datetime, timezone

from src.metro_bc.crowd.aggregator import CrowdEstimate
from src.metro_bc.live.domain.emitter import LiveFeedEmitter, MAP_ROOM, station_room
from src.metro_bc.live.domain.publisher import (
    LiveFeedPublisher,
    NEW_REPORT,
    REPORT_LIKED,
    STATION_UPDATE,
)
from src.metro_bc.live.infrastructure.websocket_emitter import WebSocketRoomEmitter
from src.metro_bc.report.domain.entities import CrowdLevel, Report

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

REPORT = Report(
    id="report-1",
    station_id="rajiv-chowk",
    level=CrowdLevel.HIGH,
    user_id="user-1",
    created_at=NOW,
    remarks="Platform 2 packed",
    likes=3,
)

ESTIMATE = CrowdEstimate(
    station_id="rajiv-chowk",
    level=CrowdLevel.HIGH,
    confidence=20,
    report_count=1,
    last_updated=NOW,
    distribution={"low": 0, "moderate": 0, "high": 100},
)


class RecordingEmitter(LiveFeedEmitter):
    def __init__(self, failing_rooms=()):
        self.emitted = []
        self.failing_rooms = set(failing_rooms)

    async def emit(self, room, event, payload):
        if room in self.failing_rooms:
            raise ConnectionError(f"{room} unavailable")
        self.emitted.append((room, event, payload))


class FakeSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


class TestLiveFeedPublisher:
    """Tests for event construction and delivery."""

    def test_report_created_targets_station_and_map_rooms(self):
        publisher = LiveFeedPublisher(RecordingEmitter())

        events = publisher.report_created(REPORT, ESTIMATE, timestamp=NOW)

        assert [(e.room, e.event) for e in events] == [
            ("station-rajiv-chowk", NEW_REPORT),
            (MAP_ROOM, STATION_UPDATE),
        ]
        assert events[0].payload["report"]["id"] == "report-1"
        assert events[1].payload == {
            "station_id": "rajiv-chowk",
            "crowd_level": "high",
            "crowd_confidence": 20,
            "report_count": 1,
            "timestamp": NOW.isoformat(),
        }

    def test_report_liked_targets_station_room(self):
        publisher = LiveFeedPublisher(RecordingEmitter())

        events = publisher.report_liked(REPORT, timestamp=NOW)

        assert len(events) == 1
        assert events[0].room == station_room("rajiv-chowk")
        assert events[0].event == REPORT_LIKED
        assert events[0].payload == {
            "station_id": "rajiv-chowk",
            "report_id": REPORT.id,
            "likes": 3,
            "timestamp": NOW.isoformat(),
        }

    def test_publish_delivers_all_events(self):
        emitter = RecordingEmitter()
        publisher = LiveFeedPublisher(emitter)

        delivered = asyncio.run(publisher.publish(publisher.report_created(REPORT, ESTIMATE)))

        assert delivered == 2
        assert {room for room, _, _ in emitter.emitted} == {"station-rajiv-chowk", MAP_ROOM}

    def test_failed_emission_is_logged_and_swallowed(self, caplog):
        emitter = RecordingEmitter(failing_rooms={"station-rajiv-chowk", MAP_ROOM})
        publisher = LiveFeedPublisher(emitter)

        with caplog.at_level(logging.ERROR):
            delivered = asyncio.run(publisher.publish(publisher.report_created(REPORT, ESTIMATE)))

        assert delivered == 0
        assert "failed" in caplog.text

    def test_one_failure_does_not_block_other_rooms(self):
        emitter = RecordingEmitter(failing_rooms={MAP_ROOM})
        publisher = LiveFeedPublisher(emitter)

        delivered = asyncio.run(publisher.publish(publisher.report_created(REPORT, ESTIMATE)))

        assert delivered == 1
        assert emitter.emitted[0][1] == NEW_REPORT

    def test_publish_nothing(self):
        publisher = LiveFeedPublisher(RecordingEmitter())
        assert asyncio.run(publisher.publish([])) == 0


class TestWebSocketRoomEmitter:
    """Tests for room membership and fan-out."""

    def test_emit_reaches_room_members_only(self):
        emitter = WebSocketRoomEmitter()
        station_socket, map_socket = FakeSocket(), FakeSocket()

        async def scenario():
            await emitter.join(station_socket, "station-rajiv-chowk")
            await emitter.join(map_socket, MAP_ROOM)
            await emitter.emit("station-rajiv-chowk", NEW_REPORT, {"id": "report-1"})

        asyncio.run(scenario())

        assert station_socket.sent == [{"event": NEW_REPORT, "data": {"id": "report-1"}}]
        assert map_socket.sent == []

    def test_failing_socket_is_dropped(self):
        emitter = WebSocketRoomEmitter()
        good, bad = FakeSocket(), FakeSocket(fail=True)

        async def scenario():
            await emitter.join(good, MAP_ROOM)
            await emitter.join(bad, MAP_ROOM)
            await emitter.emit(MAP_ROOM, STATION_UPDATE, {})

        asyncio.run(scenario())

        assert len(good.sent) == 1
        assert emitter.room_size(MAP_ROOM) == 1

    def test_leave_and_disconnect(self):
        emitter = WebSocketRoomEmitter()
        socket = FakeSocket()

        async def scenario():
            await emitter.join(socket, MAP_ROOM)
            await emitter.join(socket, "station-ito")
            await emitter.leave(socket, MAP_ROOM)
            assert emitter.room_size(MAP_ROOM) == 0
            assert emitter.room_size("station-ito") == 1
            await emitter.disconnect(socket)

        asyncio.run(scenario())

        assert emitter.room_size("station-ito") == 0
