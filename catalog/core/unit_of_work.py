"""Transaction scope shared by the repositories during one service call."""

from typing import Callable, Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.repositories.entities import EventRepository, PropertyRepository
from catalog.repositories.tracking_plans import TrackingPlanRepository


class UnitOfWork(Protocol):
    """
    One atomic scope over the catalog store.

    Entering opens a transaction; ``commit`` must be called explicitly on the
    success path. Leaving the block with the transaction still open (error,
    early return, cancellation) rolls it back.
    """

    events: EventRepository
    properties: PropertyRepository
    tracking_plans: TrackingPlanRepository

    async def __aenter__(self) -> "UnitOfWork": ...

    async def __aexit__(self, exc_type, exc_value, traceback) -> bool: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    def savepoint(self): ...


UnitOfWorkFactory = Callable[[], UnitOfWork]


class SqlAlchemyUnitOfWork:
    """Unit of work backed by a single AsyncSession"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of its 'async with' block")
        return self._session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        if self._session is not None:
            raise RuntimeError("Unit of work is already active")
        self._session = self.session_factory()
        await self._session.begin()
        self.events = EventRepository(self._session)
        self.properties = PropertyRepository(self._session)
        self.tracking_plans = TrackingPlanRepository(self._session)
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> bool:
        # close() also rolls back whatever was not committed, without
        # expiring instances that read-only callers hand back
        try:
            if exc_type is not None:
                await self.rollback()
        finally:
            await self._session.close()
            self._session = None
        return False

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    def savepoint(self):
        """Nested transaction; a failure inside only rolls back to this point"""
        return self.session.begin_nested()


def sqlalchemy_unit_of_work_factory(
        session_factory: async_sessionmaker[AsyncSession]
) -> UnitOfWorkFactory:
    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return factory
