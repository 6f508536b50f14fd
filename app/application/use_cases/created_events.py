"""
Use cases over the per-user created-events index.

The index is derived data: the events table's owner column is authoritative,
and ``RebuildCreatedEventsUseCase`` re-derives the index from it.
"""

from typing import List, Optional
from uuid import UUID

from app.domain_core.exceptions import NotFoundError
from app.domain_core.services.ownership import require_authenticated
from app.application.unit_of_work import UnitOfWork
from app.infra.config.logging_config import get_logger


class ListCreatedEventsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller_id: Optional[UUID]) -> List[UUID]:
        user_id = require_authenticated(caller_id)
        async with self.uow:
            return await self.uow.user_repo.list_created_events(user_id)


class RebuildCreatedEventsUseCase:
    """Replace a user's index with the ids of the events they currently own."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self._log = get_logger("usecase.rebuild_created_events")

    async def execute(self, caller_id: Optional[UUID]) -> List[UUID]:
        user_id = require_authenticated(caller_id)

        async with self.uow:
            if await self.uow.user_repo.get_by_id(user_id) is None:
                raise NotFoundError("User", str(user_id))
            before = await self.uow.user_repo.list_created_events(user_id)
            owned = await self.uow.event_repo.list_ids_by_owner(user_id)
            await self.uow.user_repo.replace_created_events(user_id, owned)
            await self.uow.commit()

        self._log.info(
            "usecase.rebuild_created_events.done",
            user_id=str(user_id),
            added=len(set(owned) - set(before)),
            removed=len(set(before) - set(owned)),
        )
        return owned
