"""Event sourcing: append-only event store and state projection."""

from assettrail.events.projector import StateProjector
from assettrail.events.store import EventStore

__all__ = ["EventStore", "StateProjector"]
