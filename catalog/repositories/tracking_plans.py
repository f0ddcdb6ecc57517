# Tracking plan persistence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog.models.catalog import (
    TrackingPlan,
    TrackingPlanEvent,
    TrackingPlanEventProperty,
)


def _with_graph(stmt):
    """Eager-load plan -> plan events -> event, and -> plan properties -> property"""
    plan_events = selectinload(TrackingPlan.events)
    return stmt.options(
        plan_events.selectinload(TrackingPlanEvent.event),
        plan_events.selectinload(TrackingPlanEvent.properties).selectinload(
            TrackingPlanEventProperty.property
        ),
    ).execution_options(populate_existing=True)


class TrackingPlanRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, description: str = "") -> TrackingPlan:
        plan = TrackingPlan(name=name, description=description or "")
        self.db.add(plan)
        await self.db.flush()
        return plan

    async def get_all(self) -> list[TrackingPlan]:
        stmt = _with_graph(select(TrackingPlan).order_by(TrackingPlan.id))
        result = await self.db.execute(stmt)
        return list(result.scalars().unique().all())

    async def get_by_id(self, plan_id: int) -> TrackingPlan | None:
        stmt = _with_graph(select(TrackingPlan).where(TrackingPlan.id == plan_id))
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, plan_id: int) -> TrackingPlan | None:
        """Plan row only, without its bindings"""
        return await self.db.get(TrackingPlan, plan_id)

    async def get_by_name(self, name: str) -> TrackingPlan | None:
        result = await self.db.execute(select(TrackingPlan).where(TrackingPlan.name == name))
        return result.scalar_one_or_none()

    async def update(self, plan: TrackingPlan, name: str, description: str) -> TrackingPlan:
        plan.name = name
        plan.description = description or ""
        await self.db.flush()
        return plan

    async def clear_bindings(self, plan_id: int) -> None:
        """Delete every plan-event and plan-event-property row owned by the plan"""
        plan_event_ids = select(TrackingPlanEvent.id).where(
            TrackingPlanEvent.tracking_plan_id == plan_id
        )
        await self.db.execute(
            delete(TrackingPlanEventProperty)
            .where(TrackingPlanEventProperty.tracking_plan_event_id.in_(plan_event_ids))
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(TrackingPlanEvent)
            .where(TrackingPlanEvent.tracking_plan_id == plan_id)
            .execution_options(synchronize_session=False)
        )

    async def delete(self, plan: TrackingPlan) -> None:
        await self.clear_bindings(plan.id)
        await self.db.delete(plan)
        await self.db.flush()

    async def add_event_binding(
            self,
            plan_id: int,
            event_id: int,
            additional_properties: bool,
            position: int
    ) -> TrackingPlanEvent:
        binding = TrackingPlanEvent(
            tracking_plan_id=plan_id,
            event_id=event_id,
            additional_properties=additional_properties,
            position=position
        )
        self.db.add(binding)
        await self.db.flush()
        return binding

    async def add_property_binding(
            self,
            plan_event_id: int,
            property_id: int,
            required: bool,
            position: int
    ) -> TrackingPlanEventProperty:
        binding = TrackingPlanEventProperty(
            tracking_plan_event_id=plan_event_id,
            property_id=property_id,
            required=required,
            position=position
        )
        self.db.add(binding)
        await self.db.flush()
        return binding
