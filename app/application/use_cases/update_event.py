"""
Use Case: Update Event
"""

from typing import Any, Dict, Optional
from uuid import UUID

from app.domain_core.entities.event import IMMUTABLE_FIELDS, Event
from app.domain_core.exceptions import ConflictError, EventNotFoundError
from app.domain_core.services.ownership import require_authenticated, require_owner
from app.domain_core.validators.event_validators import EventValidators
from app.application.unit_of_work import UnitOfWork
from app.application.ports import GeocoderPort
from app.infra.config.logging_config import get_logger, bind_context

# Nullable on the wire, reset to their defaults when cleared.
RESET_ON_NULL = {"description": "", "fee": 0.0, "current_participants": 0}


class UpdateEventUseCase:
    """
    Partial update of an event by its owner.

    A changed location is re-geocoded and the coordinates are overwritten even
    when the lookup fails. ``expected_version``, when given, must match the
    stored version or the update is refused with a conflict.
    """

    def __init__(self, uow: UnitOfWork, geocoder: GeocoderPort):
        self.uow = uow
        self.geocoder = geocoder
        self._log = get_logger("usecase.update_event")

    async def execute(
        self,
        caller_id: Optional[UUID],
        event_id: UUID,
        changes: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Event:
        require_authenticated(caller_id)
        bind_context(user_id=str(caller_id), event_id=str(event_id))
        self._log.info("usecase.start", action="update_event")

        async with self.uow:
            event = await self.uow.event_repo.get_by_id(event_id)

        if event is None:
            raise EventNotFoundError(str(event_id), message="Event not found.")
        require_owner(caller_id, event.owner_id)

        changes = {
            name: RESET_ON_NULL.get(name, value) if value is None else value
            for name, value in changes.items()
            if name not in IMMUTABLE_FIELDS | {"location_lat", "location_lon"}
        }
        EventValidators.validate_update_fields(changes)

        if expected_version is not None and expected_version != event.version:
            raise ConflictError(
                f"Event was modified (version {event.version}, expected {expected_version})"
            )

        new_location = changes.pop("location", None)
        if new_location is not None and new_location != event.location:
            coordinates = await self.geocoder.geocode(new_location)
            event.relocate(new_location, coordinates)
            self._log.info(
                "usecase.update_event.relocated", geocoded=coordinates.is_known
            )

        event.apply_changes(changes)
        previous_version = event.version
        event.touch()

        async with self.uow:
            written = await self.uow.event_repo.update(
                event,
                expected_version=previous_version if expected_version is not None else None,
            )
            if not written:
                if expected_version is not None:
                    raise ConflictError("Event was modified by another request")
                raise EventNotFoundError(str(event_id), message="Event not found.")
            await self.uow.commit()

        self._log.info("usecase.update_event.done", version=event.version)
        return event
