"""
Data access for the locations table.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session

from ..models import Facility, Location
from .base import storage_errors


class LocationRepository:
    """Repository for CRUD operations on locations. Never commits."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, location_id: int) -> Optional[Location]:
        with storage_errors("SELECT", "locations", id=location_id):
            return self.db.get(Location, location_id)

    def list(self, limit: int, offset: int) -> List[Location]:
        with storage_errors("SELECT", "locations"):
            stmt = select(Location).order_by(Location.id).limit(limit).offset(offset)
            return list(self.db.scalars(stmt))

    def count(self) -> int:
        with storage_errors("COUNT", "locations"):
            return self.db.scalar(select(func.count()).select_from(Location))

    def create(self, fields: Dict[str, Any]) -> Location:
        with storage_errors("INSERT", "locations"):
            location = Location(**fields)
            self.db.add(location)
            self.db.flush()
            return location

    def update(self, location: Location, fields: Dict[str, Any]) -> Location:
        with storage_errors("UPDATE", "locations", id=location.id):
            for key, value in fields.items():
                setattr(location, key, value)
            self.db.flush()
            return location

    def delete(self, location: Location) -> None:
        with storage_errors("DELETE", "locations", id=location.id):
            self.db.delete(location)
            self.db.flush()

    def is_used_by_facilities(self, location_id: int) -> bool:
        with storage_errors("SELECT", "facilities", location_id=location_id):
            return bool(self.db.scalar(select(exists().where(Facility.location_id == location_id))))
