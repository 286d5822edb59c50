from typing import Dict, List, Tuple
import logging

from sqlalchemy.orm import Session

from ..exceptions import InvalidOperationError, ResourceInUseError, ResourceNotFoundError
from ..models import Location
from ..repositories.location_repository import LocationRepository
from ..schemas import LocationCreate, LocationUpdate
from ..utils.pagination import check_page_in_range, paginate
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


class LocationService:

    def __init__(self, db: Session, locations: LocationRepository):
        self.db = db
        self.locations = locations

    def get(self, location_id: int) -> Location:
        location = self.locations.get(location_id)
        if location is None:
            raise ResourceNotFoundError("Location", location_id)
        return location

    def list(self, page: int, per_page: int) -> Tuple[List[Location], Dict[str, int]]:
        pagination = paginate(self.locations.count(), page, per_page)
        check_page_in_range(page, pagination["total_pages"])
        items = self.locations.list(pagination["per_page"], pagination["offset"])
        return items, pagination

    def create(self, data: LocationCreate) -> Location:
        with unit_of_work(self.db, "INSERT", "locations"):
            location = self.locations.create(data.model_dump())
            location_id = location.id
        logger.info(f"Created location id={location_id} city={data.city}")
        return self.get(location_id)

    def update(self, location_id: int, data: LocationUpdate) -> Location:
        fields = {
            key: value for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None and value != ""
        }
        with unit_of_work(self.db, "UPDATE", "locations"):
            location = self.get(location_id)
            if not fields:
                raise InvalidOperationError("update location", "no fields to update", {"location_id": location_id})
            self.locations.update(location, fields)
        logger.info(f"Updated location id={location_id} fields={sorted(fields)}")
        return self.get(location_id)

    def delete(self, location_id: int) -> None:
        with unit_of_work(self.db, "DELETE", "locations"):
            location = self.get(location_id)
            if self.locations.is_used_by_facilities(location_id):
                raise ResourceInUseError("location", location_id, "facilities")
            self.locations.delete(location)
        logger.info(f"Deleted location id={location_id}")
