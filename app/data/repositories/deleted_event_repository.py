"""
Archive repository for deleted events. Append-only.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.data.models.deleted_event_model import DeletedEventModel
from app.domain_core.entities.deleted_event import DeletedEvent
from app.infra.config.logging_config import get_logger


class DeletedEventRepository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.deleted_event")

    async def archive(self, record: DeletedEvent) -> UUID:
        """Store an archive record and flush it so the write is issued immediately.

        Raises ``sqlalchemy.exc.IntegrityError`` if ``original_event_id`` was
        already archived.
        """
        model = DeletedEventModel(
            id=record.id,
            original_event=record.original_event,
            original_event_id=record.original_event_id,
            deleted_by_id=record.deleted_by_id,
            deleted_at=record.deleted_at,
            reason=record.reason,
        )
        self.session.add(model)
        await self.session.flush()
        self._log.info(
            "deleted_event.archive",
            archive_id=str(model.id),
            original_event_id=str(record.original_event_id),
            deleted_by_id=str(record.deleted_by_id),
        )
        return model.id

    async def get_by_original_event_id(self, event_id: UUID) -> Optional[DeletedEvent]:
        result = await self.session.execute(
            select(DeletedEventModel).where(
                DeletedEventModel.original_event_id == event_id
            )
        )
        model = result.scalar_one_or_none()
        if not model:
            return None

        return DeletedEvent(
            id=model.id,
            original_event=model.original_event,
            original_event_id=model.original_event_id,
            deleted_by_id=model.deleted_by_id,
            deleted_at=model.deleted_at,
            reason=model.reason,
        )
