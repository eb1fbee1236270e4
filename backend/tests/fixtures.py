"""Shared test helpers."""

from typing import Any

from httpx import AsyncClient

from assettrail.events.store import EventStore


def make_event_fields(
    event_date: str = "2023-01-10",
    status: str = "Assigned",
    current_name: str = "LAPTOP-01",
    **overrides: Any,
) -> dict[str, Any]:
    """Build a complete, valid set of append fields."""
    fields = {
        "event_date": event_date,
        "status": status,
        "current_name": current_name,
        "renamed_from": "N/A",
        "renamed_to": "N/A",
        "manufacture": "Dell",
        "model": "Latitude 5420",
        "description": "Issued to finance",
    }
    fields.update(overrides)
    return fields


async def append_events(
    store: EventStore, serial: str, dates: list[str], **overrides: Any
) -> list[int]:
    """Append one event per date, in order, and return the event_ids."""
    return [
        await store.append(serial, make_event_fields(event_date=d, **overrides))
        for d in dates
    ]


# -- API-level helpers --


async def post_event(client: AsyncClient, serial: str, **overrides: Any) -> int:
    """Append an event via the API and return its event_id."""
    resp = await client.post(
        f"/api/serials/{serial}/events", json=make_event_fields(**overrides)
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["event_id"]
