"""
Transaction boundary shared by the event, archive and user repositories.

A use case opens ``async with uow:`` once per atomic step. Nothing is
written unless ``commit()`` is called inside the block; leaving the block
any other way rolls the step back, so an archive insert never survives
without its matching delete.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.ports import (
    EventRepositoryPort,
    DeletedEventRepositoryPort,
    UserRepositoryPort,
)


class UnitOfWork:
    def __init__(
        self,
        session: AsyncSession,
        event_repo: EventRepositoryPort,
        deleted_event_repo: DeletedEventRepositoryPort,
        user_repo: UserRepositoryPort,
    ):
        self.session = session
        self.event_repo = event_repo
        self.deleted_event_repo = deleted_event_repo
        self.user_repo = user_repo
        self._committed = False

    @classmethod
    def from_session(cls, session: AsyncSession) -> "UnitOfWork":
        """Wire the SQLAlchemy repositories onto one session."""
        from app.data.repositories.deleted_event_repository import (
            DeletedEventRepository,
        )
        from app.data.repositories.event_repository import EventRepository
        from app.data.repositories.user_repository import UserRepository

        return cls(
            session=session,
            event_repo=EventRepository(session),
            deleted_event_repo=DeletedEventRepository(session),
            user_repo=UserRepository(session),
        )

    async def __aenter__(self) -> "UnitOfWork":
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None or not self._committed:
            await self.rollback()

    async def commit(self):
        await self.session.commit()
        self._committed = True

    async def rollback(self):
        await self.session.rollback()

    @property
    def is_committed(self) -> bool:
        """Whether the current step has been committed."""
        return self._committed
