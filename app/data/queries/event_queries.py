"""
Read-only queries for event listings (CQRS-lite).
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.data.models.event_model import EventModel
from app.data.repositories.event_repository import EventRepository
from app.domain_core.entities.event import Event
from app.infra.config.logging_config import get_logger


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class EventQueries:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("queries.event")

    async def list_events(
        self, owner_id: Optional[UUID] = None, location: Optional[str] = None
    ) -> List[Event]:
        """List events narrowed by owner (exact) and location (case-insensitive substring)."""
        stmt = select(EventModel)

        if owner_id is not None:
            stmt = stmt.where(EventModel.owner_id == owner_id)

        if location:
            pattern = f"%{_escape_like(location)}%"
            stmt = stmt.where(EventModel.location.ilike(pattern, escape="\\"))

        result = await self.session.execute(
            stmt.order_by(EventModel.date, EventModel.created_at)
        )
        items = [EventRepository._to_entity(model) for model in result.scalars().all()]
        self._log.info(
            "event.list",
            count=len(items),
            owner_id=str(owner_id) if owner_id else None,
            location=location,
        )
        return items
