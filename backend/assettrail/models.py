"""Canonical data structures for AssetTrail.

Defined once here, referenced everywhere else. An Event is one immutable
lifecycle fact about a serial number; CurrentState and FullView are the
read-side projections derived from a serial's events.
"""

import re
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from assettrail.errors import EventValidationError

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def normalize_serial(raw: Any) -> str:
    """Trim and uppercase a serial number. Rejects missing or blank input."""
    if not isinstance(raw, str) or not raw.strip():
        raise EventValidationError("Invalid serial number", fields=["serial_number"])
    return raw.strip().upper()


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------


class NewEvent(BaseModel):
    """Caller-supplied fields for one append. Text is stored trimmed.

    Every text field is required. Callers send "N/A" when a field does not
    apply; that value gets no special treatment.
    """

    model_config = ConfigDict(str_strip_whitespace=True, str_min_length=1)

    event_date: date
    status: str
    current_name: str
    renamed_from: str
    renamed_to: str
    manufacture: str
    model: str
    description: str

    @field_validator("event_date", mode="before")
    @classmethod
    def iso_date_only(cls, value: Any) -> Any:
        # Lax date parsing would read numbers as Unix timestamps and accept
        # midnight datetime strings.
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if isinstance(value, str) and _ISO_DATE.fullmatch(value.strip()):
            return value.strip()
        raise ValueError("event_date must be a YYYY-MM-DD calendar date")


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_id: int
    serial_number: str
    event_date: date
    status: str
    current_name: str
    renamed_from: str
    renamed_to: str
    manufacture: str
    model: str
    description: str
    created_at: datetime

    def sort_key(self) -> tuple[date, int]:
        """History order: event_date, then event_id for same-day events."""
        return (self.event_date, self.event_id)


class CurrentState(BaseModel):
    serial_number: str
    current_name: str
    current_status: str
    last_event_date: date
    manufacture: str
    model: str
    description: str

    @classmethod
    def from_event(cls, event: Event) -> "CurrentState":
        return cls(
            serial_number=event.serial_number,
            current_name=event.current_name,
            current_status=event.status,
            last_event_date=event.event_date,
            manufacture=event.manufacture,
            model=event.model,
            description=event.description,
        )


class FullView(BaseModel):
    current_state: CurrentState
    history: list[Event]
    total_events: int
