"""
Use Case: Delete Event

This use case handles:
1. Loading the event, scoped to the caller as owner
2. Archiving a full snapshot of it
3. Removing it from the active set in the same transaction
4. Dropping it from the owner's created-events index
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from app.domain_core.entities.deleted_event import DEFAULT_DELETION_REASON, DeletedEvent
from app.domain_core.exceptions import EventNotFoundError
from app.domain_core.services.ownership import require_authenticated
from app.application.unit_of_work import UnitOfWork
from app.infra.config.logging_config import get_logger, bind_context

DELETE_NOT_FOUND_MESSAGE = "Event not found or user unauthorized to delete."


class DeleteEventUseCase:
    """
    Archive-then-delete of an owned event.

    The archive insert and the conditional delete share one transaction, so
    there is never an active event with an archive record nor a deleted event
    without one. Missing and not-owned events are reported the same way.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self._log = get_logger("usecase.delete_event")

    async def execute(
        self, caller_id: Optional[UUID], event_id: UUID, reason: Optional[str] = None
    ) -> DeletedEvent:
        owner_id = require_authenticated(caller_id)
        bind_context(user_id=str(owner_id), event_id=str(event_id))
        self._log.info("usecase.start", action="delete_event")

        async with self.uow:
            event = await self.uow.event_repo.get_owned(event_id, owner_id)
            if event is None:
                raise EventNotFoundError(str(event_id), message=DELETE_NOT_FOUND_MESSAGE)

            record = DeletedEvent(
                original_event=event.snapshot(),
                original_event_id=event.id,
                deleted_by_id=owner_id,
                reason=reason or DEFAULT_DELETION_REASON,
            )

            try:
                await self.uow.deleted_event_repo.archive(record)
            except IntegrityError as e:
                # An archive row already exists while the event is still active.
                self._log.error(
                    "usecase.delete_event.archive_conflict", error=str(e.orig)
                )
                raise EventNotFoundError(
                    str(event_id), message=DELETE_NOT_FOUND_MESSAGE
                ) from e

            deleted = await self.uow.event_repo.delete_owned(event_id, owner_id)
            if not deleted:
                # Lost a race with a concurrent delete; the archive row rolls back.
                raise EventNotFoundError(str(event_id), message=DELETE_NOT_FOUND_MESSAGE)

            await self.uow.commit()

        self._log.info("usecase.delete_event.done", archive_id=str(record.id))

        await self._remove_from_index(owner_id, event_id)
        return record

    async def _remove_from_index(self, owner_id: UUID, event_id: UUID):
        try:
            async with self.uow:
                await self.uow.user_repo.remove_created_event(owner_id, event_id)
                await self.uow.commit()
        except Exception as e:
            self._log.exception(
                "usecase.side_effect.index_error", event_id=str(event_id), error=str(e)
            )
