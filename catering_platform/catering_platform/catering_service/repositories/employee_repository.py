"""
Data access for employees and their facility assignments.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.sql import Select

from ..models import Employee, Facility, Location, employee_facilities
from .base import storage_errors


class EmployeeRepository:

    def __init__(self, db: Session):
        self.db = db

    def _matching_ids(self, where_clause: str, params: Dict[str, Any]) -> Select:
        return (
            select(Employee.id)
            .select_from(Employee)
            .outerjoin(employee_facilities, employee_facilities.c.employee_id == Employee.id)
            .outerjoin(Facility, employee_facilities.c.facility_id == Facility.id)
            .outerjoin(Location, Facility.location_id == Location.id)
            .where(text(where_clause).bindparams(**params))
            .distinct()
        )

    def get(self, employee_id: int) -> Optional[Employee]:
        with storage_errors("SELECT", "employees", id=employee_id):
            stmt = select(Employee).options(selectinload(Employee.facilities)).where(Employee.id == employee_id)
            return self.db.scalar(stmt)

    def search(self, where_clause: str, params: Dict[str, Any], limit: int, offset: int) -> List[Employee]:
        with storage_errors("SELECT", "employees", where=where_clause):
            ids = self._matching_ids(where_clause, params).subquery()
            stmt = (
                select(Employee)
                .options(selectinload(Employee.facilities))
                .where(Employee.id.in_(select(ids.c.id)))
                .order_by(Employee.id)
                .limit(limit)
                .offset(offset)
            )
            return list(self.db.scalars(stmt))

    def count_matching(self, where_clause: str, params: Dict[str, Any]) -> int:
        with storage_errors("COUNT", "employees", where=where_clause):
            ids = self._matching_ids(where_clause, params).subquery()
            return self.db.scalar(select(func.count()).select_from(ids))

    def is_email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        with storage_errors("SELECT", "employees", email=email):
            stmt = select(Employee.id).where(Employee.email == email)
            if exclude_id is not None:
                stmt = stmt.where(Employee.id != exclude_id)
            return self.db.scalar(stmt) is not None

    def create(self, fields: Dict[str, Any]) -> Employee:
        with storage_errors("INSERT", "employees", email=fields.get("email")):
            employee = Employee(**fields)
            self.db.add(employee)
            self.db.flush()
            return employee

    def update(self, employee: Employee, fields: Dict[str, Any]) -> Employee:
        with storage_errors("UPDATE", "employees", id=employee.id):
            for key, value in fields.items():
                setattr(employee, key, value)
            self.db.flush()
            return employee

    def replace_facilities(self, employee: Employee, facilities: List[Facility]) -> None:
        with storage_errors("UPDATE", "employee_facilities", employee_id=employee.id):
            employee.facilities = list(facilities)
            self.db.flush()

    def delete(self, employee: Employee) -> None:
        with storage_errors("DELETE", "employees", id=employee.id):
            self.db.delete(employee)
            self.db.flush()
