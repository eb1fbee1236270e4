"""State projector: derives current asset state from the event log.

The read side. Nothing is materialized; every call re-derives from the
stored events, so projections can never drift from the log.
"""

import logging

from assettrail.db.connection import Database
from assettrail.errors import ConsistencyError, SerialNotFoundError
from assettrail.events.store import EventStore
from assettrail.models import CurrentState, FullView

logger = logging.getLogger(__name__)


class StateProjector:
    """Projects a serial's events into its current state."""

    def __init__(self, db: Database, store: EventStore | None = None) -> None:
        self._db = db
        self._store = store or EventStore(db)

    async def current_state(self, serial: str) -> CurrentState:
        """Current state of one serial. Raises SerialNotFoundError if unknown."""
        latest = await self._store.get_latest(serial)
        return CurrentState.from_event(latest)

    async def full_view(self, serial: str) -> FullView:
        """Current state plus ordered history and event count.

        Both reads share one snapshot; if they still disagree the log is
        corrupt and ConsistencyError is raised instead of a partial view.
        """
        async with self._db.transaction():
            latest = await self._store.get_latest(serial)
            try:
                history = await self._store.get_history(serial)
            except SerialNotFoundError:
                logger.error("Latest event exists but history is empty for %s", serial)
                raise ConsistencyError(latest.serial_number, "history is empty")

        if history[-1] != latest:
            logger.error(
                "Latest event %d is not last in history for %s",
                latest.event_id, latest.serial_number,
            )
            raise ConsistencyError(
                latest.serial_number,
                f"latest event {latest.event_id} is not the last history entry",
            )

        return FullView(
            current_state=CurrentState.from_event(latest),
            history=history,
            total_events=len(history),
        )

    async def catalog(self) -> list[CurrentState]:
        """One current-state row per known serial, ordered by serial_number."""
        latest_events = await self._store.list_latest_per_serial()
        return [CurrentState.from_event(event) for event in latest_events]
