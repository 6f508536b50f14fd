"""
Read-side use cases for events.
"""

from typing import List, Optional
from uuid import UUID

from app.data.queries.event_queries import EventQueries
from app.domain_core.entities.event import Event
from app.domain_core.exceptions import BadRequestError, EventNotFoundError
from app.domain_core.services.geo import filter_by_radius
from app.domain_core.validators.event_validators import parse_geo_filter
from app.application.unit_of_work import UnitOfWork
from app.infra.config.logging_config import get_logger


class GetEventUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, event_id: UUID) -> Event:
        async with self.uow:
            event = await self.uow.event_repo.get_by_id(event_id)
        if event is None:
            raise EventNotFoundError(str(event_id), message="Event not found.")
        return event


class ListEventsUseCase:
    """
    Public event listing.

    The geographic filter applies only when userLat, userLon and radius are
    all supplied; events with unknown coordinates are then left out.
    """

    def __init__(self, queries: EventQueries):
        self.queries = queries
        self._log = get_logger("usecase.list_events")

    async def execute(
        self,
        owner_id: Optional[str] = None,
        location: Optional[str] = None,
        user_lat: Optional[str] = None,
        user_lon: Optional[str] = None,
        radius: Optional[str] = None,
    ) -> List[Event]:
        geo_filter = parse_geo_filter(user_lat, user_lon, radius)
        owner_uuid = _parse_owner_id(owner_id)

        events = await self.queries.list_events(
            owner_id=owner_uuid, location=location or None
        )
        if geo_filter is not None:
            events = filter_by_radius(events, geo_filter)
            self._log.info(
                "usecase.list_events.radius",
                radius_km=geo_filter.radius_km,
                count=len(events),
            )
        return events


def _parse_owner_id(owner_id: Optional[str]) -> Optional[UUID]:
    if not owner_id:
        return None
    try:
        return UUID(owner_id)
    except ValueError:
        raise BadRequestError("ownerId is not a valid identifier")
