"""
Request-scoped wiring of repositories and services.
"""
from dataclasses import dataclass

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .repositories.employee_repository import EmployeeRepository
from .repositories.facility_repository import FacilityRepository
from .repositories.location_repository import LocationRepository
from .repositories.tag_repository import TagRepository
from .services.employee_service import EmployeeService
from .services.facility_service import FacilityService
from .services.location_service import LocationService
from .services.tag_service import TagService


@dataclass
class PageParams:
    page: int
    per_page: int


def get_page_params(
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE),
) -> PageParams:
    return PageParams(page=page, per_page=per_page)


def get_location_service(db: Session = Depends(get_db)) -> LocationService:
    return LocationService(db, LocationRepository(db))


def get_tag_service(db: Session = Depends(get_db)) -> TagService:
    return TagService(db, TagRepository(db))


def get_facility_service(db: Session = Depends(get_db)) -> FacilityService:
    return FacilityService(
        db,
        facilities=FacilityRepository(db),
        locations=LocationRepository(db),
        tags=TagRepository(db),
    )


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    return EmployeeService(db, EmployeeRepository(db), FacilityRepository(db))
