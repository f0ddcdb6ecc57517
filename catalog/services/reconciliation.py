from sqlalchemy.exc import IntegrityError
import structlog

from catalog.core.errors import ConflictError, InvalidInputError
from catalog.core.unit_of_work import UnitOfWork
from catalog.models.catalog import Event, Property
from catalog.services.validation import PROPERTY_TYPES

logger = structlog.get_logger()


class ReconciliationEngine:
    """
    Find-or-create for the shared Event and Property rows.

    Every call runs inside the caller's unit of work, so a created row only
    becomes durable when the caller commits. An existing row is never
    modified: a different non-empty description is a conflict, and an empty
    supplied description means "no opinion".
    """

    async def resolve_event(
            self,
            uow: UnitOfWork,
            name: str,
            type: str,
            description: str = ""
    ) -> Event:
        return await self._resolve(uow, uow.events, "Event", name, type, description)

    async def resolve_property(
            self,
            uow: UnitOfWork,
            name: str,
            type: str,
            description: str = ""
    ) -> Property:
        if type not in PROPERTY_TYPES:
            raise InvalidInputError(
                f"Invalid property type '{type}' for property '{name}'. "
                f"Must be one of: {', '.join(PROPERTY_TYPES)}"
            )
        return await self._resolve(uow, uow.properties, "Property", name, type, description)

    async def _resolve(self, uow: UnitOfWork, repository, kind: str, name: str, type: str, description: str):
        description = description or ""
        existing = await repository.get_by_name_and_type(name, type)

        if existing is None:
            try:
                async with uow.savepoint():
                    created = await repository.create(name=name, type=type, description=description)
            except IntegrityError:
                # A concurrent transaction inserted the same (name, type) first
                logger.warning("reconcile_insert_race", kind=kind, name=name, type=type)
                existing = await repository.get_by_name_and_type(name, type)
                if existing is None:
                    raise ConflictError(
                        f"{kind} '{name}' ({type}) is being created concurrently, retry the request",
                        details={"entity": kind.lower(), "name": name, "type": type}
                    )
            else:
                logger.debug("reconcile_created", kind=kind, name=name, type=type, id=created.id)
                return created

        self._check_description(kind, existing, description)
        return existing

    @staticmethod
    def _check_description(kind: str, existing, description: str) -> None:
        if existing.description and description and existing.description != description:
            logger.info(
                "reconcile_conflict",
                kind=kind,
                name=existing.name,
                type=existing.type,
            )
            raise ConflictError(
                f"{kind} '{existing.name}' ({existing.type}) exists with a different description",
                details={
                    "entity": kind.lower(),
                    "name": existing.name,
                    "type": existing.type,
                    "field": "description",
                    "existing": existing.description,
                    "supplied": description,
                }
            )
