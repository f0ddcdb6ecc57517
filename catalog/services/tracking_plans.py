from catalog.core.errors import ConflictError, NotFoundError, translate_store_errors
from catalog.core.unit_of_work import UnitOfWork, UnitOfWorkFactory
from catalog.models.catalog import TrackingPlan
from catalog.schemas.tracking_plan import TrackingPlanCreate
from catalog.services.reconciliation import ReconciliationEngine
from catalog.services.validation import validate_tracking_plan
import structlog

logger = structlog.get_logger()


class TrackingPlanService:
    """Builds, rebuilds and removes tracking plan graphs atomically"""

    def __init__(self, uow_factory: UnitOfWorkFactory, reconciler: ReconciliationEngine | None = None):
        self.uow_factory = uow_factory
        self.reconciler = reconciler or ReconciliationEngine()

    async def list_plans(self) -> list[TrackingPlan]:
        with translate_store_errors("fetch tracking plans"):
            async with self.uow_factory() as uow:
                return await uow.tracking_plans.get_all()

    async def get_plan(self, plan_id: int) -> TrackingPlan:
        with translate_store_errors("fetch tracking plan"):
            async with self.uow_factory() as uow:
                plan = await uow.tracking_plans.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError("Tracking plan not found")
        return plan

    async def create_plan(self, spec: TrackingPlanCreate) -> TrackingPlan:
        """
        Compose a new plan and every binding it declares in one transaction.

        Returns the full graph re-read after commit.
        """
        validate_tracking_plan(spec)

        conflict = f"Tracking plan '{spec.name}' already exists"
        try:
            with translate_store_errors(
                    "create tracking plan",
                    conflict_message=conflict,
                    reference_message=self._reference_message(spec)
            ):
                async with self.uow_factory() as uow:
                    if await uow.tracking_plans.get_by_name(spec.name) is not None:
                        raise ConflictError(conflict, details={"field": "name", "name": spec.name})

                    plan = await uow.tracking_plans.create(spec.name, spec.description)
                    plan_id = plan.id
                    await self._compose(uow, plan_id, spec)
                    await uow.commit()
        except Exception as e:
            logger.warning("tracking_plan_compose_failed", action="create", name=spec.name, error=str(e))
            raise

        logger.info("tracking_plan_created", plan_id=plan_id, name=spec.name, events=len(spec.events))
        return await self.get_plan(plan_id)

    async def update_plan(self, plan_id: int, spec: TrackingPlanCreate) -> TrackingPlan:
        """
        Overwrite name/description and rebuild the binding set from scratch.

        The previous plan-event and plan-event-property rows are deleted before
        the new ones are composed; shared Event/Property rows are left alone.
        """
        validate_tracking_plan(spec)

        conflict = f"Tracking plan '{spec.name}' already exists"
        try:
            with translate_store_errors(
                    "update tracking plan",
                    conflict_message=conflict,
                    reference_message=self._reference_message(spec)
            ):
                async with self.uow_factory() as uow:
                    plan = await uow.tracking_plans.get(plan_id)
                    if plan is None:
                        raise NotFoundError("Tracking plan not found")

                    if spec.name != plan.name:
                        other = await uow.tracking_plans.get_by_name(spec.name)
                        if other is not None and other.id != plan.id:
                            raise ConflictError(conflict, details={"field": "name", "name": spec.name})

                    await uow.tracking_plans.update(plan, spec.name, spec.description)
                    await uow.tracking_plans.clear_bindings(plan_id)
                    await self._compose(uow, plan_id, spec)
                    await uow.commit()
        except Exception as e:
            logger.warning(
                "tracking_plan_compose_failed",
                action="update",
                plan_id=plan_id,
                name=spec.name,
                error=str(e)
            )
            raise

        logger.info("tracking_plan_updated", plan_id=plan_id, name=spec.name, events=len(spec.events))
        return await self.get_plan(plan_id)

    async def delete_plan(self, plan_id: int) -> None:
        with translate_store_errors("delete tracking plan"):
            async with self.uow_factory() as uow:
                plan = await uow.tracking_plans.get(plan_id)
                if plan is None:
                    raise NotFoundError("Tracking plan not found")
                await uow.tracking_plans.delete(plan)
                await uow.commit()

        logger.info("tracking_plan_deleted", plan_id=plan_id)

    @staticmethod
    def _reference_message(spec: TrackingPlanCreate) -> str:
        return (
            f"Tracking plan '{spec.name}' references an event or property "
            "that was deleted concurrently, retry the request"
        )

    async def _compose(self, uow: UnitOfWork, plan_id: int, spec: TrackingPlanCreate) -> None:
        # Declaration order matters: the first use of a (name, type) creates
        # the row, later uses in the same transaction resolve to it.
        for event_index, event_spec in enumerate(spec.events):
            event = await self.reconciler.resolve_event(
                uow,
                event_spec.name,
                event_spec.type,
                event_spec.description
            )
            plan_event = await uow.tracking_plans.add_event_binding(
                plan_id,
                event.id,
                event_spec.additional_properties,
                position=event_index
            )

            for property_index, property_spec in enumerate(event_spec.properties):
                prop = await self.reconciler.resolve_property(
                    uow,
                    property_spec.name,
                    property_spec.type,
                    property_spec.description
                )
                await uow.tracking_plans.add_property_binding(
                    plan_event.id,
                    prop.id,
                    property_spec.required,
                    position=property_index
                )
