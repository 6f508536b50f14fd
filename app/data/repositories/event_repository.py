"""
Event repository for data access operations.
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from app.data.models.event_model import EventModel
from app.domain_core.entities.event import Event
from app.infra.config.logging_config import get_logger


class EventRepository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.event")

    async def create(self, event: Event) -> Event:
        """Create a new event."""
        event_model = EventModel(
            id=event.id,
            owner_id=event.owner_id,
            title=event.title,
            description=event.description,
            location=event.location,
            date=event.date,
            last_registration_date=event.last_registration_date,
            category=event.category,
            sub_category=event.sub_category,
            fee=event.fee,
            image_url=event.image_url,
            instagram_link=event.instagram_link,
            website_link=event.website_link,
            registration_link=event.registration_link,
            max_participants=event.max_participants,
            current_participants=event.current_participants,
            location_lat=event.location_lat,
            location_lon=event.location_lon,
            version=event.version,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

        self.session.add(event_model)
        await self.session.flush()

        event.id = event_model.id
        self._log.info(
            "event.create", event_id=str(event.id), owner_id=str(event.owner_id)
        )
        return event

    async def get_by_id(self, event_id: UUID) -> Optional[Event]:
        """Get event by ID."""
        result = await self.session.execute(
            select(EventModel).where(EventModel.id == event_id)
        )
        event_model = result.scalar_one_or_none()

        if not event_model:
            self._log.info("event.get.not_found", event_id=str(event_id))
            return None

        self._log.info("event.get", event_id=str(event_id))
        return self._to_entity(event_model)

    async def get_owned(self, event_id: UUID, owner_id: UUID) -> Optional[Event]:
        """Get event by ID only if ``owner_id`` owns it."""
        result = await self.session.execute(
            select(EventModel).where(
                EventModel.id == event_id, EventModel.owner_id == owner_id
            )
        )
        event_model = result.scalar_one_or_none()

        if not event_model:
            self._log.info(
                "event.get_owned.not_found",
                event_id=str(event_id),
                owner_id=str(owner_id),
            )
            return None

        return self._to_entity(event_model)

    async def update(self, event: Event, expected_version: Optional[int] = None) -> bool:
        """Persist every mutable field of an existing event.

        With ``expected_version`` the write only applies if the stored version
        still matches. Returns False when no row was written.
        """
        stmt = update(EventModel).where(EventModel.id == event.id)
        if expected_version is not None:
            stmt = stmt.where(EventModel.version == expected_version)

        result = await self.session.execute(
            stmt
            .values(
                title=event.title,
                description=event.description,
                location=event.location,
                date=event.date,
                last_registration_date=event.last_registration_date,
                category=event.category,
                sub_category=event.sub_category,
                fee=event.fee,
                image_url=event.image_url,
                instagram_link=event.instagram_link,
                website_link=event.website_link,
                registration_link=event.registration_link,
                max_participants=event.max_participants,
                current_participants=event.current_participants,
                location_lat=event.location_lat,
                location_lon=event.location_lon,
                version=event.version,
                updated_at=event.updated_at,
            )
        )
        updated = result.rowcount > 0
        self._log.info(
            "event.update",
            event_id=str(event.id),
            version=event.version,
            updated=updated,
        )
        return updated

    async def delete_owned(self, event_id: UUID, owner_id: UUID) -> bool:
        """Delete an event only if ``owner_id`` still owns it."""
        result = await self.session.execute(
            delete(EventModel)
            .where(EventModel.id == event_id, EventModel.owner_id == owner_id)
        )
        deleted = result.rowcount > 0
        self._log.info("event.delete", event_id=str(event_id), deleted=deleted)
        return deleted

    async def list_ids_by_owner(self, owner_id: UUID) -> List[UUID]:
        """Ids of every event owned by ``owner_id``, oldest first."""
        result = await self.session.execute(
            select(EventModel.id)
            .where(EventModel.owner_id == owner_id)
            .order_by(EventModel.created_at)
        )
        ids = list(result.scalars().all())
        self._log.info("event.list_ids", owner_id=str(owner_id), count=len(ids))
        return ids

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        """Convert SQLAlchemy model to domain entity."""
        return Event(
            id=model.id,
            owner_id=model.owner_id,
            title=model.title,
            description=model.description or "",
            location=model.location,
            date=model.date,
            last_registration_date=model.last_registration_date,
            category=model.category,
            sub_category=model.sub_category,
            fee=model.fee if model.fee is not None else 0.0,
            image_url=model.image_url,
            instagram_link=model.instagram_link,
            website_link=model.website_link,
            registration_link=model.registration_link,
            max_participants=model.max_participants,
            current_participants=model.current_participants or 0,
            location_lat=model.location_lat,
            location_lon=model.location_lon,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
