from fastapi import APIRouter, Depends, Path, Response, status
from typing import List

from catalog.api.deps import get_tracking_plan_service
from catalog.core.auth import require_principal
from catalog.schemas.tracking_plan import TrackingPlanCreate, TrackingPlanResponse, TrackingPlanUpdate
from catalog.services.tracking_plans import TrackingPlanService

router = APIRouter(
    prefix="/tracking-plans",
    tags=["tracking-plans"],
    dependencies=[Depends(require_principal)]
)


@router.post("", response_model=TrackingPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_tracking_plan(
        payload: TrackingPlanCreate,
        service: TrackingPlanService = Depends(get_tracking_plan_service)
):
    """
    Create a tracking plan together with its event and property bindings.

    - Events and properties are matched by (name, type) and created if absent
    - A shared event/property with a different description is a 409
    - Nothing is persisted unless the whole plan composes
    """
    return await service.create_plan(payload)


@router.get("", response_model=List[TrackingPlanResponse])
async def list_tracking_plans(service: TrackingPlanService = Depends(get_tracking_plan_service)):
    return await service.list_plans()


@router.get("/{plan_id}", response_model=TrackingPlanResponse)
async def get_tracking_plan(
        plan_id: int = Path(..., gt=0),
        service: TrackingPlanService = Depends(get_tracking_plan_service)
):
    return await service.get_plan(plan_id)


@router.put("/{plan_id}", response_model=TrackingPlanResponse)
async def update_tracking_plan(
        payload: TrackingPlanUpdate,
        plan_id: int = Path(..., gt=0),
        service: TrackingPlanService = Depends(get_tracking_plan_service)
):
    """Replace the plan definition; previous bindings are discarded and rebuilt"""
    return await service.update_plan(plan_id, payload)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tracking_plan(
        plan_id: int = Path(..., gt=0),
        service: TrackingPlanService = Depends(get_tracking_plan_service)
):
    await service.delete_plan(plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
