from fastapi import APIRouter, Depends, status

from ..auth import require_auth
from ..deps import PageParams, get_location_service, get_page_params
from ..schemas import (
    LocationCreate,
    LocationListResponse,
    LocationOut,
    LocationUpdate,
    MessageResponse,
)
from ..services.location_service import LocationService

router = APIRouter(prefix="/locations", tags=["locations"], dependencies=[Depends(require_auth)])


@router.get("", response_model=LocationListResponse)
def list_locations(
    pagination: PageParams = Depends(get_page_params),
    service: LocationService = Depends(get_location_service)
):
    items, meta = service.list(pagination.page, pagination.per_page)
    return {"locations": items, "pagination": meta}


@router.get("/{location_id}", response_model=LocationOut)
def get_location(location_id: int, service: LocationService = Depends(get_location_service)):
    return service.get(location_id)


@router.post("", response_model=LocationOut, status_code=status.HTTP_201_CREATED)
def create_location(payload: LocationCreate, service: LocationService = Depends(get_location_service)):
    return service.create(payload)


@router.put("/{location_id}", response_model=LocationOut)
@router.patch("/{location_id}", response_model=LocationOut)
def update_location(
    location_id: int,
    payload: LocationUpdate,
    service: LocationService = Depends(get_location_service)
):
    return service.update(location_id, payload)


@router.delete("/{location_id}", response_model=MessageResponse)
def delete_location(location_id: int, service: LocationService = Depends(get_location_service)):
    service.delete(location_id)
    return {"message": f"Location with ID {location_id} successfully deleted."}
