from typing import Optional

from fastapi import APIRouter, Depends, status

from ..auth import require_auth
from ..deps import PageParams, get_employee_service, get_page_params
from ..schemas import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeOut,
    EmployeeUpdate,
    MessageResponse,
)
from ..services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"], dependencies=[Depends(require_auth)])


@router.get("", response_model=EmployeeListResponse)
def list_employees(
    query: Optional[str] = None,
    filter: Optional[str] = None,
    operator: Optional[str] = None,
    employee_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    facility_name: Optional[str] = None,
    city: Optional[str] = None,
    pagination: PageParams = Depends(get_page_params),
    service: EmployeeService = Depends(get_employee_service)
):
    field_terms = {
        "employee_name": employee_name,
        "email": email,
        "phone": phone,
        "address": address,
        "facility_name": facility_name,
        "city": city,
    }
    items, meta = service.list(pagination.page, pagination.per_page, query, filter, operator, field_terms)
    return {"employees": items, "pagination": meta}


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    return service.get(employee_id)


@router.post("", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def create_employee(payload: EmployeeCreate, service: EmployeeService = Depends(get_employee_service)):
    return service.create(payload)


@router.put("/{employee_id}", response_model=EmployeeOut)
@router.patch("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service)
):
    return service.update(employee_id, payload)


@router.delete("/{employee_id}", response_model=MessageResponse)
def delete_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    service.delete(employee_id)
    return {"message": f"Employee with ID {employee_id} successfully deleted."}
