from catalog.core.errors import ConflictError, NotFoundError, translate_store_errors
from catalog.core.unit_of_work import UnitOfWorkFactory
from catalog.services.validation import validate_event, validate_property
import structlog

logger = structlog.get_logger()


class _CatalogEntityService:
    """CRUD for the shared (name, type)-keyed entities"""

    kind: str = ""
    repository_name: str = ""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    def _validate(self, name: str, type: str) -> None:
        raise NotImplementedError

    def _repository(self, uow):
        return getattr(uow, self.repository_name)

    def _duplicate(self, name: str, type: str) -> ConflictError:
        return ConflictError(
            f"{self.kind} '{name}' ({type}) already exists",
            details={"entity": self.kind.lower(), "name": name, "type": type}
        )

    async def create(self, payload):
        self._validate(payload.name, payload.type)

        with translate_store_errors(
                f"create {self.kind.lower()}",
                conflict_message=f"{self.kind} '{payload.name}' ({payload.type}) already exists"
        ):
            async with self.uow_factory() as uow:
                repository = self._repository(uow)
                if await repository.get_by_name_and_type(payload.name, payload.type) is not None:
                    raise self._duplicate(payload.name, payload.type)
                entity = await repository.create(payload.name, payload.type, payload.description)
                await uow.commit()

        logger.info(f"{self.kind.lower()}_created", id=entity.id, name=entity.name, type=entity.type)
        return entity

    async def get_all(self) -> list:
        with translate_store_errors(f"fetch {self.kind.lower()} list"):
            async with self.uow_factory() as uow:
                return await self._repository(uow).get_all()

    async def get(self, entity_id: int):
        with translate_store_errors(f"fetch {self.kind.lower()}"):
            async with self.uow_factory() as uow:
                entity = await self._repository(uow).get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind} not found")
        return entity

    async def update(self, entity_id: int, payload):
        """Full overwrite of name, type and description"""
        self._validate(payload.name, payload.type)

        with translate_store_errors(
                f"update {self.kind.lower()}",
                conflict_message=f"{self.kind} '{payload.name}' ({payload.type}) already exists"
        ):
            async with self.uow_factory() as uow:
                repository = self._repository(uow)
                entity = await repository.get_by_id(entity_id)
                if entity is None:
                    raise NotFoundError(f"{self.kind} not found")

                other = await repository.get_by_name_and_type(payload.name, payload.type)
                if other is not None and other.id != entity.id:
                    raise self._duplicate(payload.name, payload.type)

                entity = await repository.update(entity, payload.name, payload.type, payload.description)
                await uow.commit()

        logger.info(f"{self.kind.lower()}_updated", id=entity.id, name=entity.name, type=entity.type)
        return entity

    async def delete(self, entity_id: int) -> None:
        # A binding committed after the is_referenced check trips the foreign key
        with translate_store_errors(
                f"delete {self.kind.lower()}",
                reference_message=f"{self.kind} {entity_id} is used by a tracking plan"
        ):
            async with self.uow_factory() as uow:
                repository = self._repository(uow)
                entity = await repository.get_by_id(entity_id)
                if entity is None:
                    raise NotFoundError(f"{self.kind} not found")
                # Shared rows stay while any tracking plan still binds them
                if await repository.is_referenced(entity_id):
                    raise ConflictError(
                        f"{self.kind} '{entity.name}' ({entity.type}) is used by a tracking plan",
                        details={"entity": self.kind.lower(), "id": entity_id}
                    )
                await repository.delete(entity)
                await uow.commit()

        logger.info(f"{self.kind.lower()}_deleted", id=entity_id)


class EventService(_CatalogEntityService):
    kind = "Event"
    repository_name = "events"

    def _validate(self, name: str, type: str) -> None:
        validate_event(name, type)


class PropertyService(_CatalogEntityService):
    kind = "Property"
    repository_name = "properties"

    def _validate(self, name: str, type: str) -> None:
        validate_property(name, type)
