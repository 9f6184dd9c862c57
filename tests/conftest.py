"""Pytest configuration and fixtures."""

import os

# Tests run against in-memory SQLite; set before importing the app
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite://"
os.environ["NETWORK_DATA_SOURCE"] = "database"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

from pathlib import Path

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

import models  # noqa: F401
from app import app
from core.base import Base
from core.containers import live_feed_container
from core.database import SessionLocal, engine
from src.metro_bc.edge.infrastructure.repositories import EdgeRepository
from src.metro_bc.live.domain.emitter import LiveFeedEmitter
from src.metro_bc.routing.network_source import read_json_dataset
from src.metro_bc.station.infrastructure.repositories import StationRepository

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture
def db_session():
    """Session on a fresh schema; tables are dropped afterwards."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_network(db_session):
    """Sample network from data/ loaded into the database."""
    dataset = read_json_dataset(DATA_DIR)
    StationRepository(db_session).replace_all(dataset.stations)
    EdgeRepository(db_session).replace_all(dataset.edges)
    return dataset


@pytest.fixture
def client(db_session):
    """Create a test client for the FastAPI app."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def api_base_url():
    """Base URL for metro API endpoints."""
    return "/api/v1"


class RecordingEmitter(LiveFeedEmitter):
    """Collects live events instead of sending them to sockets."""

    def __init__(self):
        self.emitted = []

    async def emit(self, room, event, payload):
        self.emitted.append((room, event, payload))


@pytest.fixture
def live_events():
    """Events pushed to the live feed during the test, as (room, event, payload)."""
    recorder = RecordingEmitter()
    with live_feed_container.emitter.override(providers.Object(recorder)):
        live_feed_container.publisher.reset()
        yield recorder.emitted
    live_feed_container.publisher.reset()
