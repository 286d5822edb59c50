"""
Facility endpoints. Listing and search share one query path; ``/search``
is declared before ``/{facility_id}`` so it is not captured as an id.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..auth import require_auth
from ..deps import PageParams, get_facility_service, get_page_params
from ..schemas import (
    FacilityCreate,
    FacilityListResponse,
    FacilityOut,
    FacilityUpdate,
    MessageResponse,
)
from ..services.facility_service import FacilityService

router = APIRouter(prefix="/facilities", tags=["facilities"], dependencies=[Depends(require_auth)])


def _list(service: FacilityService, pagination: PageParams, query, filter, operator):
    items, meta = service.list(pagination.page, pagination.per_page, query, filter, operator)
    return {"facilities": items, "pagination": meta}


@router.get("", response_model=FacilityListResponse)
def list_facilities(
    query: Optional[str] = None,
    filter: Optional[str] = None,
    operator: Optional[str] = None,
    pagination: PageParams = Depends(get_page_params),
    service: FacilityService = Depends(get_facility_service)
):
    return _list(service, pagination, query, filter, operator)


@router.get("/search", response_model=FacilityListResponse)
def search_facilities(
    query: Optional[str] = Query(None, description="Case-insensitive substring to match"),
    filter: Optional[str] = Query(None, description="Comma-separated fields: facility_name, city, tag"),
    operator: Optional[str] = Query(None, description="AND or OR, defaults to OR"),
    pagination: PageParams = Depends(get_page_params),
    service: FacilityService = Depends(get_facility_service)
):
    return _list(service, pagination, query, filter, operator)


@router.get("/{facility_id}", response_model=FacilityOut)
def get_facility(facility_id: int, service: FacilityService = Depends(get_facility_service)):
    return service.get(facility_id)


@router.post("", response_model=FacilityOut, status_code=status.HTTP_201_CREATED)
def create_facility(payload: FacilityCreate, service: FacilityService = Depends(get_facility_service)):
    return service.create(payload)


@router.put("/{facility_id}", response_model=FacilityOut)
@router.patch("/{facility_id}", response_model=FacilityOut)
def update_facility(
    facility_id: int,
    payload: FacilityUpdate,
    service: FacilityService = Depends(get_facility_service)
):
    return service.update(facility_id, payload)


@router.delete("/{facility_id}", response_model=MessageResponse)
def delete_facility(facility_id: int, service: FacilityService = Depends(get_facility_service)):
    service.delete(facility_id)
    return {"message": f"Facility with ID {facility_id} successfully deleted."}
