"""
Use cases for the authenticated principal.
"""

from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError

from app.domain_core.entities.user import IdentityProfile, User
from app.domain_core.exceptions import NotFoundError, PersistenceError
from app.application.unit_of_work import UnitOfWork
from app.infra.config.logging_config import get_logger


class SyncIdentityUseCase:
    """
    Upsert a user from an identity-provider profile.

    Keyed on the provider's external id. An existing user has the mirrored
    fields overwritten; a new one starts unverified with an empty index.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self._log = get_logger("usecase.sync_identity")

    async def execute(self, profile: IdentityProfile) -> User:
        try:
            async with self.uow:
                user = await self.uow.user_repo.get_by_external_id(profile.external_id)
                if user is None:
                    user = User(
                        id=uuid4(),
                        external_id=profile.external_id,
                        display_name=profile.display_name,
                        email=profile.email,
                        profile_photo=profile.profile_photo,
                    )
                    await self.uow.user_repo.create(user)
                    created = True
                else:
                    user.mirror_profile(profile)
                    await self.uow.user_repo.update_profile(user)
                    created = False
                await self.uow.commit()
        except SQLAlchemyError as e:
            self._log.exception("usecase.sync_identity.persist_failed", error=str(e))
            raise PersistenceError("could not store user profile") from e

        self._log.info("usecase.sync_identity.done", user_id=str(user.id), created=created)
        return user


class GetUserUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> User:
        async with self.uow:
            user = await self.uow.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user
