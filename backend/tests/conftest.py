"""Shared pytest fixtures for AssetTrail tests."""

import pytest
from httpx import ASGITransport, AsyncClient

from assettrail.db.connection import Database
from assettrail.events.projector import StateProjector
from assettrail.events.store import EventStore
from assettrail.main import app
from assettrail.serials.router import get_event_store, get_state_projector


@pytest.fixture
async def db():
    """In-memory database for tests."""
    database = await Database.connect(":memory:")
    yield database
    await database.close()


@pytest.fixture
async def event_store(db):
    """EventStore backed by in-memory database."""
    return EventStore(db)


@pytest.fixture
async def projector(db, event_store):
    """StateProjector backed by in-memory database."""
    return StateProjector(db, event_store)


@pytest.fixture
async def client(event_store, projector):
    """Async test client with in-memory DB wired into the app."""
    app.dependency_overrides[get_event_store] = lambda: event_store
    app.dependency_overrides[get_state_projector] = lambda: projector
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
