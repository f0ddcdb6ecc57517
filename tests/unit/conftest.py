from contextlib import asynccontextmanager
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError


class InMemoryRepository:
    """(name, type)-keyed store standing in for the SQLAlchemy repositories"""

    def __init__(self):
        self.rows: list[SimpleNamespace] = []
        self.created = 0

    async def get_by_name_and_type(self, name, type):
        for row in self.rows:
            if row.name == name and row.type == type:
                return row
        return None

    async def create(self, name, type, description=""):
        if await self.get_by_name_and_type(name, type) is not None:
            raise IntegrityError("INSERT", {"name": name, "type": type}, Exception("UNIQUE constraint failed"))
        row = SimpleNamespace(id=len(self.rows) + 1, name=name, type=type, description=description or "")
        self.rows.append(row)
        self.created += 1
        return row


class RacingRepository(InMemoryRepository):
    """Another transaction commits the same (name, type) between lookup and insert"""

    def __init__(self, concurrent_description=""):
        super().__init__()
        self.concurrent_description = concurrent_description
        self.raced = False

    async def create(self, name, type, description=""):
        if not self.raced:
            self.raced = True
            self.rows.append(
                SimpleNamespace(id=99, name=name, type=type, description=self.concurrent_description)
            )
        return await super().create(name, type, description)


class VanishingRepository(InMemoryRepository):
    """Insert collides but the winning row is not visible on re-read"""

    async def create(self, name, type, description=""):
        raise IntegrityError("INSERT", {"name": name, "type": type}, Exception("UNIQUE constraint failed"))


class FakeUnitOfWork:
    def __init__(self, events=None, properties=None):
        self.events = events or InMemoryRepository()
        self.properties = properties or InMemoryRepository()
        self.savepoints = 0

    @asynccontextmanager
    async def savepoint(self):
        self.savepoints += 1
        yield


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def make_uow():
    def factory(**repositories) -> FakeUnitOfWork:
        return FakeUnitOfWork(**repositories)

    return factory


@pytest.fixture
def racing_repository():
    return RacingRepository


@pytest.fixture
def vanishing_repository():
    return VanishingRepository
