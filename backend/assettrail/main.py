"""AssetTrail FastAPI application entry point."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assettrail.db.connection import Database
from assettrail.events.projector import StateProjector
from assettrail.events.store import EventStore
from assettrail.serials.router import get_event_store, get_state_projector
from assettrail.serials.router import router as serials_router

VERSION = "0.1.0"

# Load .env from backend/ directory before reading any settings
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _cors_origins() -> list[str]:
    raw = os.environ.get("ASSETTRAIL_CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage database lifecycle and service wiring."""
    db = await Database.connect(os.environ.get("ASSETTRAIL_DB_PATH", "assettrail.db"))

    store = EventStore(db)
    projector = StateProjector(db, store)
    app.dependency_overrides[get_event_store] = lambda: store
    app.dependency_overrides[get_state_projector] = lambda: projector

    app.state.db = db
    yield

    await db.close()


app = FastAPI(
    title="AssetTrail",
    description="Lifecycle event log and current-state view for serialized assets",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(serials_router)


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "version": VERSION}
