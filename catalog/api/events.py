from fastapi import APIRouter, Depends, Path, Response, status
from typing import List

from catalog.api.deps import get_event_service
from catalog.core.auth import require_principal
from catalog.schemas.event import EventCreate, EventResponse, EventUpdate
from catalog.services.catalog import EventService

router = APIRouter(prefix="/events", tags=["events"], dependencies=[Depends(require_principal)])


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
        payload: EventCreate,
        service: EventService = Depends(get_event_service)
):
    """
    Create a new event.

    - **type**: one of track, identify, alias, screen, page
    - An event with the same name and type already existing is a 409
    """
    return await service.create(payload)


@router.get("", response_model=List[EventResponse])
async def list_events(service: EventService = Depends(get_event_service)):
    return await service.get_all()


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
        event_id: int = Path(..., gt=0),
        service: EventService = Depends(get_event_service)
):
    return await service.get(event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
        payload: EventUpdate,
        event_id: int = Path(..., gt=0),
        service: EventService = Depends(get_event_service)
):
    """Full overwrite of name, type and description"""
    return await service.update(event_id, payload)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
        event_id: int = Path(..., gt=0),
        service: EventService = Depends(get_event_service)
):
    await service.delete(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
