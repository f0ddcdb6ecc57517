# Request-scoped service wiring

from fastapi import Request

from catalog.services.catalog import EventService, PropertyService
from catalog.services.tracking_plans import TrackingPlanService


def get_event_service(request: Request) -> EventService:
    return EventService(request.app.state.uow_factory)


def get_property_service(request: Request) -> PropertyService:
    return PropertyService(request.app.state.uow_factory)


def get_tracking_plan_service(request: Request) -> TrackingPlanService:
    return TrackingPlanService(request.app.state.uow_factory)
