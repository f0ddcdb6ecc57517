from fastapi import APIRouter, Depends, Path, Response, status
from typing import List

from catalog.api.deps import get_property_service
from catalog.core.auth import require_principal
from catalog.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate
from catalog.services.catalog import PropertyService

router = APIRouter(prefix="/properties", tags=["properties"], dependencies=[Depends(require_principal)])


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
        payload: PropertyCreate,
        service: PropertyService = Depends(get_property_service)
):
    """
    Create a new property.

    - **type**: one of string, number, boolean
    """
    return await service.create(payload)


@router.get("", response_model=List[PropertyResponse])
async def list_properties(service: PropertyService = Depends(get_property_service)):
    return await service.get_all()


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
        property_id: int = Path(..., gt=0),
        service: PropertyService = Depends(get_property_service)
):
    return await service.get(property_id)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
        payload: PropertyUpdate,
        property_id: int = Path(..., gt=0),
        service: PropertyService = Depends(get_property_service)
):
    return await service.update(property_id, payload)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(
        property_id: int = Path(..., gt=0),
        service: PropertyService = Depends(get_property_service)
):
    await service.delete(property_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
