"""
Use Case: Road Distance

Driving distance and duration from the caller's point to an event.
"""

from typing import Optional
from uuid import UUID

from app.domain_core.exceptions import EventNotFoundError, ExternalServiceDegradedError
from app.domain_core.validators.event_validators import parse_user_point
from app.domain_core.value_objects.coordinates import RoadDistance
from app.application.unit_of_work import UnitOfWork
from app.application.ports import RoadDistancePort
from app.infra.config.logging_config import get_logger


class RoadDistanceUseCase:
    def __init__(self, uow: UnitOfWork, distance_client: RoadDistancePort):
        self.uow = uow
        self.distance_client = distance_client
        self._log = get_logger("usecase.road_distance")

    async def execute(
        self, event_id: UUID, user_lat: Optional[str], user_lon: Optional[str]
    ) -> RoadDistance:
        origin_lat, origin_lon = parse_user_point(user_lat, user_lon)

        async with self.uow:
            event = await self.uow.event_repo.get_by_id(event_id)

        if not self.distance_client.is_configured:
            self._log.error("usecase.road_distance.not_configured")
            raise ExternalServiceDegradedError(
                "Server Error: road distance provider is not configured."
            )

        if event is None or not event.coordinates.is_known:
            raise EventNotFoundError(
                str(event_id), message="Event not found or event location is missing."
            )

        result = await self.distance_client.road_distance(
            origin_lat, origin_lon, event.location_lat, event.location_lon
        )
        if not result.is_known:
            raise ExternalServiceDegradedError("Could not calculate road distance.")

        self._log.info(
            "usecase.road_distance.done",
            event_id=str(event_id),
            distance_km=result.distance_km,
        )
        return result
