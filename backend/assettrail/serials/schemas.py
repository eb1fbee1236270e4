"""Request and response schemas for serial endpoints."""

from typing import Any

from pydantic import BaseModel

from assettrail.models import CurrentState, Event

# -- Requests --


class AppendEventRequest(BaseModel):
    """Body for POST /api/serials/{serial}/events.

    Fields accept any JSON value and may be missing, so that every bad
    input is reported the same way, by the event store's validation.
    """

    event_date: Any | None = None
    status: Any | None = None
    current_name: Any | None = None
    renamed_from: Any | None = None
    renamed_to: Any | None = None
    manufacture: Any | None = None
    model: Any | None = None
    description: Any | None = None


# -- Responses --


class CatalogResponse(BaseModel):
    serials: list[CurrentState]


class HistoryResponse(BaseModel):
    history: list[Event]


class AppendEventResponse(BaseModel):
    event_id: int


class DeleteSerialResponse(BaseModel):
    message: str
    deleted: int
