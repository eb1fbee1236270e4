"""FastAPI routes for listing, inspecting, appending to and deleting serials."""

from fastapi import APIRouter, Depends, HTTPException, status

from assettrail.errors import (
    EventOrderingError,
    EventValidationError,
    SerialNotFoundError,
)
from assettrail.events.projector import StateProjector
from assettrail.events.store import EventStore
from assettrail.models import CurrentState, FullView, normalize_serial
from assettrail.serials.schemas import (
    AppendEventRequest,
    AppendEventResponse,
    CatalogResponse,
    DeleteSerialResponse,
    HistoryResponse,
)

router = APIRouter(prefix="/api/serials", tags=["serials"])


def get_event_store() -> EventStore:
    """Dependency placeholder, replaced at app startup."""
    raise RuntimeError("EventStore not initialized")


def get_state_projector() -> StateProjector:
    """Dependency placeholder, replaced at app startup."""
    raise RuntimeError("StateProjector not initialized")


@router.get("")
async def list_serials(
    projector: StateProjector = Depends(get_state_projector),
) -> CatalogResponse:
    return CatalogResponse(serials=await projector.catalog())


@router.get("/{serial}")
async def get_serial(
    serial: str,
    projector: StateProjector = Depends(get_state_projector),
) -> FullView:
    try:
        return await projector.full_view(serial)
    except EventValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SerialNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{serial}/history")
async def get_history(
    serial: str,
    store: EventStore = Depends(get_event_store),
) -> HistoryResponse:
    try:
        return HistoryResponse(history=await store.get_history(serial))
    except EventValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SerialNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{serial}/status")
async def get_status(
    serial: str,
    projector: StateProjector = Depends(get_state_projector),
) -> CurrentState:
    try:
        return await projector.current_state(serial)
    except EventValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SerialNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{serial}/events", status_code=status.HTTP_201_CREATED)
async def append_event(
    serial: str,
    request: AppendEventRequest | None = None,
    store: EventStore = Depends(get_event_store),
) -> AppendEventResponse:
    fields = request.model_dump() if request is not None else {}
    try:
        event_id = await store.append(serial, fields)
    except EventValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EventOrderingError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return AppendEventResponse(event_id=event_id)


@router.delete("/{serial}")
async def delete_serial(
    serial: str,
    store: EventStore = Depends(get_event_store),
) -> DeleteSerialResponse:
    try:
        deleted = await store.delete_all(serial)
    except EventValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SerialNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return DeleteSerialResponse(
        message=f"Deleted all events for serial {normalize_serial(serial)}",
        deleted=deleted,
    )
