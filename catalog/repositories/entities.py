# Event / Property persistence

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.catalog import (
    Base,
    Event,
    Property,
    TrackingPlanEvent,
    TrackingPlanEventProperty,
)


class _NamedTypeRepository:
    """Shared CRUD for entities identified by a (name, type) pair"""

    model: type[Base]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, type: str, description: str = ""):
        entity = self.model(name=name, type=type, description=description or "")
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def get_all(self) -> list:
        result = await self.db.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: int):
        return await self.db.get(self.model, entity_id)

    async def get_by_name_and_type(self, name: str, type: str):
        stmt = select(self.model).where(self.model.name == name, self.model.type == type)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, entity, name: str, type: str, description: str):
        entity.name = name
        entity.type = type
        entity.description = description or ""
        await self.db.flush()
        return entity

    async def delete(self, entity) -> None:
        await self.db.delete(entity)
        await self.db.flush()


class EventRepository(_NamedTypeRepository):
    model = Event

    async def is_referenced(self, event_id: int) -> bool:
        stmt = select(exists().where(TrackingPlanEvent.event_id == event_id))
        return bool(await self.db.scalar(stmt))


class PropertyRepository(_NamedTypeRepository):
    model = Property

    async def is_referenced(self, property_id: int) -> bool:
        stmt = select(exists().where(TrackingPlanEventProperty.property_id == property_id))
        return bool(await self.db.scalar(stmt))
