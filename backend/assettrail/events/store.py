"""Append-only event store backed by SQLite."""

import logging
from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

from pydantic import ValidationError

from assettrail.db.connection import Database
from assettrail.errors import (
    EventOrderingError,
    EventValidationError,
    SerialNotFoundError,
)
from assettrail.models import Event, NewEvent, normalize_serial

logger = logging.getLogger(__name__)

_LATEST_FOR_SERIAL_SQL = """
    SELECT * FROM asset_events
    WHERE serial_number = ?
    ORDER BY event_date DESC, event_id DESC
    LIMIT 1
"""

_LATEST_PER_SERIAL_SQL = """
    SELECT * FROM (
        SELECT *, ROW_NUMBER() OVER (
            PARTITION BY serial_number
            ORDER BY event_date DESC, event_id DESC
        ) AS recency
        FROM asset_events
    )
    WHERE recency = 1
    ORDER BY serial_number
"""


class EventStore:
    """Append-only log of asset lifecycle events, keyed by serial number.

    Every serial argument is normalized on the way in, so " ab12 ", "AB12"
    and "ab12" address the same events.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    async def append(self, serial: str, fields: NewEvent | Mapping[str, Any]) -> int:
        """Append one event and return its assigned event_id.

        Raises EventValidationError for a blank serial or bad fields, and
        EventOrderingError if event_date precedes the serial's latest event.
        The latest-event check and the insert run in one write transaction.
        """
        serial_number = normalize_serial(serial)
        new_event = self._validate(fields)

        async with self._db.transaction(immediate=True):
            row = await self._db.fetchone(_LATEST_FOR_SERIAL_SQL, (serial_number,))
            if row is not None:
                latest_date = date.fromisoformat(row["event_date"])
                if new_event.event_date < latest_date:
                    logger.info(
                        "Rejected out-of-order event for %s: %s < %s",
                        serial_number, new_event.event_date, latest_date,
                    )
                    raise EventOrderingError(
                        serial_number, new_event.event_date, latest_date
                    )

            cursor = await self._db.execute(
                """
                INSERT INTO asset_events
                    (serial_number, event_date, status, current_name, renamed_from,
                     renamed_to, manufacture, model, description, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    serial_number,
                    new_event.event_date.isoformat(),
                    new_event.status,
                    new_event.current_name,
                    new_event.renamed_from,
                    new_event.renamed_to,
                    new_event.manufacture,
                    new_event.model,
                    new_event.description,
                    datetime.now(UTC).isoformat(),
                ),
            )
        assert cursor.lastrowid is not None
        logger.info("Appended event %d for %s", cursor.lastrowid, serial_number)
        return cursor.lastrowid

    async def get_history(self, serial: str) -> list[Event]:
        """All events for a serial, oldest first. Raises SerialNotFoundError if none."""
        serial_number = normalize_serial(serial)
        rows = await self._db.fetchall(
            """
            SELECT * FROM asset_events
            WHERE serial_number = ?
            ORDER BY event_date ASC, event_id ASC
            """,
            (serial_number,),
        )
        if not rows:
            raise SerialNotFoundError(serial_number)
        return [self._row_to_event(row) for row in rows]

    async def get_latest(self, serial: str) -> Event:
        """The most recent event for a serial. Same-day ties go to the higher event_id."""
        serial_number = normalize_serial(serial)
        row = await self._db.fetchone(_LATEST_FOR_SERIAL_SQL, (serial_number,))
        if row is None:
            raise SerialNotFoundError(serial_number)
        return self._row_to_event(row)

    async def list_latest_per_serial(self) -> list[Event]:
        """The latest event of every known serial, ordered by serial_number."""
        rows = await self._db.fetchall(_LATEST_PER_SERIAL_SQL)
        return [self._row_to_event(row) for row in rows]

    async def delete_all(self, serial: str) -> int:
        """Delete every event for a serial and return how many were removed.

        Raises SerialNotFoundError if the serial had no events, so a repeated
        delete is reported rather than silently accepted.
        """
        serial_number = normalize_serial(serial)
        cursor = await self._db.execute(
            "DELETE FROM asset_events WHERE serial_number = ?", (serial_number,)
        )
        if cursor.rowcount == 0:
            raise SerialNotFoundError(serial_number)
        logger.info("Deleted %d events for %s", cursor.rowcount, serial_number)
        return cursor.rowcount

    @staticmethod
    def _validate(fields: NewEvent | Mapping[str, Any]) -> NewEvent:
        if isinstance(fields, NewEvent):
            return fields
        try:
            return NewEvent.model_validate(dict(fields))
        except ValidationError as e:
            bad = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise EventValidationError(
                'All fields are required (use "N/A" if not applicable) and '
                f"event_date must be YYYY-MM-DD; invalid: {', '.join(bad)}",
                fields=bad,
            ) from e

    @staticmethod
    def _row_to_event(row) -> Event:
        """Convert a database row to an Event."""
        return Event(
            event_id=row["event_id"],
            serial_number=row["serial_number"],
            event_date=row["event_date"],
            status=row["status"],
            current_name=row["current_name"],
            renamed_from=row["renamed_from"],
            renamed_to=row["renamed_to"],
            manufacture=row["manufacture"],
            model=row["model"],
            description=row["description"],
            created_at=row["created_at"],
        )
