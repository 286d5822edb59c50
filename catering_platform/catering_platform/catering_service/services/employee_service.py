"""
Employees and their facility assignments.
"""
from typing import Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from ..exceptions import DuplicateResourceError, InvalidOperationError, ResourceNotFoundError
from ..models import Employee
from ..repositories.employee_repository import EmployeeRepository
from ..repositories.facility_repository import FacilityRepository
from ..schemas import EmployeeCreate, EmployeeUpdate
from ..utils.pagination import check_page_in_range, paginate
from ..utils.search import EMPLOYEE_SEARCH_FIELDS, build_employee_clause, parse_filters
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

_SCALAR_FIELDS = ("name", "email", "phone", "address")


class EmployeeService:

    def __init__(self, db: Session, employees: EmployeeRepository, facilities: FacilityRepository):
        self.db = db
        self.employees = employees
        self.facilities = facilities

    def get(self, employee_id: int) -> Employee:
        employee = self.employees.get(employee_id)
        if employee is None:
            raise ResourceNotFoundError("Employee", employee_id)
        return employee

    def list(
        self,
        page: int,
        per_page: int,
        query: Optional[str] = None,
        filter: Optional[str] = None,
        operator: Optional[str] = None,
        field_terms: Optional[Dict[str, Optional[str]]] = None,
    ) -> Tuple[List[Employee], Dict[str, int]]:
        filters = parse_filters(filter, EMPLOYEE_SEARCH_FIELDS)
        where, params = build_employee_clause(query, filters, operator, field_terms)
        pagination = paginate(self.employees.count_matching(where, params), page, per_page)
        check_page_in_range(page, pagination["total_pages"])
        items = self.employees.search(where, params, pagination["per_page"], pagination["offset"])
        return items, pagination

    def _assign_facilities(self, employee: Employee, facility_ids: List[int]) -> None:
        missing = self.facilities.find_missing_ids(facility_ids)
        if missing:
            raise ResourceNotFoundError("Facility", missing[0])
        self.employees.replace_facilities(employee, self.facilities.get_many(facility_ids))

    def create(self, data: EmployeeCreate) -> Employee:
        with unit_of_work(self.db, "INSERT", "employees"):
            if self.employees.is_email_taken(data.email):
                raise DuplicateResourceError("Employee", "email", data.email)
            employee = self.employees.create(data.model_dump(include=set(_SCALAR_FIELDS)))
            if data.facility_ids:
                self._assign_facilities(employee, data.facility_ids)
            employee_id = employee.id

        logger.info(f"Created employee id={employee_id}")
        return self._reload(employee_id)

    def update(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        supplied = data.model_dump(exclude_unset=True)
        fields = {
            key: value for key, value in supplied.items()
            if key in _SCALAR_FIELDS and value is not None and value != ""
        }
        facilities_supplied = data.facility_ids is not None

        with unit_of_work(self.db, "UPDATE", "employees"):
            employee = self.get(employee_id)
            if not fields and not facilities_supplied:
                raise InvalidOperationError("update employee", "no fields to update", {"employee_id": employee_id})
            if "email" in fields and self.employees.is_email_taken(fields["email"], exclude_id=employee_id):
                raise DuplicateResourceError("Employee", "email", fields["email"])
            if fields:
                self.employees.update(employee, fields)
            if facilities_supplied:
                self._assign_facilities(employee, data.facility_ids)

        logger.info(f"Updated employee id={employee_id} fields={sorted(fields)}")
        return self._reload(employee_id)

    def delete(self, employee_id: int) -> None:
        with unit_of_work(self.db, "DELETE", "employees"):
            self.employees.delete(self.get(employee_id))
        logger.info(f"Deleted employee id={employee_id}")

    def _reload(self, employee_id: int) -> Employee:
        self.db.expire_all()
        return self.get(employee_id)
