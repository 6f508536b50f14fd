"""
User repository: identity records, verification submissions and the
created-events index.
"""

from typing import Optional, List, Sequence
from uuid import UUID
from datetime import datetime, timedelta, UTC
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, insert

from app.data.models.user_model import UserModel, UserCreatedEventModel
from app.domain_core.entities.user import User, VerificationDetails
from app.infra.config.logging_config import get_logger


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._log = get_logger("repo.user")

    async def create(self, user: User) -> User:
        """Create a new user."""
        user_model = UserModel(
            id=user.id,
            external_id=user.external_id,
            display_name=user.display_name,
            email=user.email,
            profile_photo=user.profile_photo,
            location_lat=user.location_lat,
            location_lon=user.location_lon,
            verified_profile=user.verified_profile,
            created_at=user.created_at,
        )
        self.session.add(user_model)
        await self.session.flush()
        self._log.info("user.create", user_id=str(user.id))
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        user_model = result.scalar_one_or_none()
        if not user_model:
            self._log.info("user.get.not_found", user_id=str(user_id))
            return None
        return await self._to_entity(user_model)

    async def get_by_external_id(self, external_id: str) -> Optional[User]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.external_id == external_id)
        )
        user_model = result.scalar_one_or_none()
        if not user_model:
            return None
        return await self._to_entity(user_model)

    async def update_profile(self, user: User) -> User:
        """Persist the identity-provider mirrored fields."""
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(
                display_name=user.display_name,
                email=user.email,
                profile_photo=user.profile_photo,
                updated_at=user.updated_at,
            )
        )
        self._log.info("user.update_profile", user_id=str(user.id))
        return user

    async def save_verification(self, user: User) -> bool:
        """Persist the verification submission; False if the user row is gone."""
        details = user.verification_details
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(
                verified_profile=user.verified_profile,
                verification_full_name=details.full_name if details else None,
                verification_father_name=details.father_name if details else None,
                verification_mobile_number=details.mobile_number if details else None,
                verification_full_address=details.full_address if details else None,
                verification_document_url=details.document_url if details else None,
                verification_submitted_at=details.submitted_at if details else None,
                updated_at=user.updated_at,
            )
        )
        saved = result.rowcount > 0
        self._log.info("user.save_verification", user_id=str(user.id), saved=saved)
        return saved

    # ---------- created-events index ----------

    async def append_created_event(self, user_id: UUID, event_id: UUID) -> None:
        """Append ``event_id`` to the index; a no-op if already present."""
        existing = await self.session.execute(
            select(UserCreatedEventModel.event_id).where(
                UserCreatedEventModel.user_id == user_id,
                UserCreatedEventModel.event_id == event_id,
            )
        )
        if existing.first() is not None:
            return
        await self.session.execute(
            insert(UserCreatedEventModel).values(
                user_id=user_id, event_id=event_id, added_at=datetime.now(UTC)
            )
        )
        self._log.info(
            "user.created_events.append", user_id=str(user_id), event_id=str(event_id)
        )

    async def remove_created_event(self, user_id: UUID, event_id: UUID) -> None:
        await self.session.execute(
            delete(UserCreatedEventModel)
            .where(
                UserCreatedEventModel.user_id == user_id,
                UserCreatedEventModel.event_id == event_id,
            )
        )
        self._log.info(
            "user.created_events.remove", user_id=str(user_id), event_id=str(event_id)
        )

    async def list_created_events(self, user_id: UUID) -> List[UUID]:
        result = await self.session.execute(
            select(UserCreatedEventModel.event_id)
            .where(UserCreatedEventModel.user_id == user_id)
            .order_by(UserCreatedEventModel.added_at)
        )
        return list(result.scalars().all())

    async def replace_created_events(
        self, user_id: UUID, event_ids: Sequence[UUID]
    ) -> None:
        """Overwrite the whole index with ``event_ids`` in the given order."""
        await self.session.execute(
            delete(UserCreatedEventModel)
            .where(UserCreatedEventModel.user_id == user_id)
        )
        if event_ids:
            base = datetime.now(UTC).replace(microsecond=0)
            # microsecond offsets keep the order stable
            await self.session.execute(
                insert(UserCreatedEventModel),
                [
                    {
                        "user_id": user_id,
                        "event_id": event_id,
                        "added_at": base + timedelta(microseconds=position),
                    }
                    for position, event_id in enumerate(event_ids)
                ],
            )
        self._log.info(
            "user.created_events.replace", user_id=str(user_id), count=len(event_ids)
        )

    async def _to_entity(self, model: UserModel) -> User:
        details = None
        if model.verification_submitted_at is not None:
            details = VerificationDetails(
                full_name=model.verification_full_name or "",
                father_name=model.verification_father_name or "",
                mobile_number=model.verification_mobile_number or "",
                full_address=model.verification_full_address or "",
                document_url=model.verification_document_url or "",
                submitted_at=model.verification_submitted_at,
            )

        return User(
            id=model.id,
            external_id=model.external_id,
            display_name=model.display_name,
            email=model.email,
            profile_photo=model.profile_photo,
            location_lat=model.location_lat,
            location_lon=model.location_lon,
            verified_profile=bool(model.verified_profile),
            verification_details=details,
            created_events=await self.list_created_events(model.id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
