"""
Event endpoints: public listing and lookup, owner-only writes.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from app.api.dependencies import (
    OptionalUserId,
    get_create_event_use_case,
    get_delete_event_use_case,
    get_get_event_use_case,
    get_list_events_use_case,
    get_road_distance_use_case,
    get_update_event_use_case,
)
from app.api.schemas.event_io import (
    CreateEventRequest,
    DeleteEventRequest,
    DeleteEventResponse,
    EventResponse,
    RoadDistanceResponse,
    UpdateEventRequest,
)
from app.application.use_cases import (
    CreateEventUseCase,
    DeleteEventUseCase,
    GetEventUseCase,
    ListEventsUseCase,
    RoadDistanceUseCase,
    UpdateEventUseCase,
)
from app.domain_core.exceptions import DomainError
from app.infra.config.logging_config import get_logger, bind_context

router = APIRouter(prefix="/events", tags=["events"])
log = get_logger("api.events")


@router.get("", response_model=List[EventResponse])
async def list_events(
    location: Optional[str] = Query(None, description="Case-insensitive substring"),
    user_lat: Optional[str] = Query(None, alias="userLat"),
    user_lon: Optional[str] = Query(None, alias="userLon"),
    radius: Optional[str] = Query(None, description="Radius in kilometres"),
    owner_id: Optional[str] = Query(None, alias="ownerId"),
    use_case: ListEventsUseCase = Depends(get_list_events_use_case),
) -> List[EventResponse]:
    """
    List events.

    The radius filter applies only when userLat, userLon and radius are all
    given; events without coordinates are then excluded.
    """
    events = await use_case.execute(
        owner_id=owner_id,
        location=location,
        user_lat=user_lat,
        user_lon=user_lon,
        radius=radius,
    )
    return [EventResponse.from_entity(event) for event in events]


# Declared before "/{event_id}" so "distance" is not parsed as an id.
@router.get("/distance/{event_id}", response_model=RoadDistanceResponse)
async def get_road_distance(
    event_id: UUID,
    user_lat: Optional[str] = Query(None, alias="userLat"),
    user_lon: Optional[str] = Query(None, alias="userLon"),
    use_case: RoadDistanceUseCase = Depends(get_road_distance_use_case),
) -> RoadDistanceResponse:
    result = await use_case.execute(event_id, user_lat, user_lon)
    return RoadDistanceResponse(distance=result.distance_km, duration=result.duration_text)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    use_case: GetEventUseCase = Depends(get_get_event_use_case),
) -> EventResponse:
    event = await use_case.execute(event_id)
    return EventResponse.from_entity(event)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    caller_id: OptionalUserId,
    use_case: CreateEventUseCase = Depends(get_create_event_use_case),
) -> EventResponse:
    """Publish a new event owned by the caller."""
    try:
        event = await use_case.execute(caller_id, request.to_payload())
        return EventResponse.from_entity(event)
    except DomainError:
        raise
    except Exception as e:
        log.exception("event.create.error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while creating event.",
        )


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    request: UpdateEventRequest,
    caller_id: OptionalUserId,
    use_case: UpdateEventUseCase = Depends(get_update_event_use_case),
) -> EventResponse:
    """Apply a partial update. Only the owner may update an event."""
    event = await use_case.execute(
        caller_id,
        event_id,
        request.to_changes(),
        expected_version=request.version,
    )
    return EventResponse.from_entity(event)


@router.delete("/{event_id}", response_model=DeleteEventResponse)
async def delete_event(
    event_id: UUID,
    caller_id: OptionalUserId,
    request: Optional[DeleteEventRequest] = Body(None),
    use_case: DeleteEventUseCase = Depends(get_delete_event_use_case),
) -> DeleteEventResponse:
    """Archive the event and remove it from the active list."""
    bind_context(event_id=str(event_id))
    try:
        record = await use_case.execute(
            caller_id, event_id, reason=request.reason if request else None
        )
    except DomainError:
        raise
    except Exception as e:
        log.exception("event.delete.error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while deleting event.",
        )

    log.info("event.delete.success", archive_id=str(record.id))
    return DeleteEventResponse(
        message="Event archived and deleted successfully from active list.",
        archive_id=record.id,
    )
