"""
Use Case: Create Event

This use case handles:
1. Checking the caller is logged in
2. Validating the required fields
3. Geocoding the location (best effort)
4. Persisting the event owned by the caller
5. Recording the event in the caller's created-events index
"""

from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError

from app.domain_core.entities.event import IMMUTABLE_FIELDS, Event
from app.domain_core.exceptions import PersistenceError
from app.domain_core.services.ownership import require_authenticated
from app.domain_core.validators.event_validators import EventValidators
from app.application.unit_of_work import UnitOfWork
from app.application.ports import GeocoderPort
from app.infra.config.logging_config import get_logger, bind_context

CREATE_EXCLUDED_FIELDS = IMMUTABLE_FIELDS | {
    "location_lat",
    "location_lon",
    "current_participants",
    "updated_at",
}


class CreateEventUseCase:
    """
    Use case for publishing a new event.

    The owner is always the caller; any owner field in the payload is ignored.
    A failed geocode never blocks creation, the event is stored with unknown
    coordinates instead.
    """

    def __init__(self, uow: UnitOfWork, geocoder: GeocoderPort):
        self.uow = uow
        self.geocoder = geocoder
        self._log = get_logger("usecase.create_event")

    async def execute(self, caller_id: Optional[UUID], payload: Dict[str, Any]) -> Event:
        """
        Execute the create event use case.

        Args:
            caller_id: Session principal, None for anonymous callers
            payload: Event fields keyed by entity attribute name

        Returns:
            The persisted event
        """
        owner_id = require_authenticated(caller_id)
        bind_context(user_id=str(owner_id))
        self._log.info("usecase.start", action="create_event")

        EventValidators.validate_required_fields(payload)

        coordinates = await self.geocoder.geocode(payload["location"])

        fields = {
            name: value
            for name, value in payload.items()
            if name not in CREATE_EXCLUDED_FIELDS and value is not None
        }
        event = Event(id=uuid4(), owner_id=owner_id, **fields)
        event.relocate(event.location, coordinates)

        async with self.uow:
            try:
                await self.uow.event_repo.create(event)
                await self.uow.commit()
            except SQLAlchemyError as e:
                self._log.exception("usecase.create_event.persist_failed", error=str(e))
                raise PersistenceError("could not save event") from e

        self._log.info(
            "usecase.create_event.done",
            event_id=str(event.id),
            geocoded=coordinates.is_known,
        )

        await self._record_in_index(event)
        return event

    async def _record_in_index(self, event: Event):
        """Index update after commit; the event stays created if this fails."""
        try:
            async with self.uow:
                await self.uow.user_repo.append_created_event(event.owner_id, event.id)
                await self.uow.commit()
        except Exception as e:
            self._log.exception(
                "usecase.side_effect.index_error", event_id=str(event.id), error=str(e)
            )
