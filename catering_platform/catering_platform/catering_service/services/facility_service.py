"""
Facility write path and listing.

Create and update run inside one unit of work: the location check, the
facility row, any new tag rows and the association rows are committed
together or not at all.
"""
from typing import Any, Dict, List, Optional, Protocol, Tuple
import logging

from sqlalchemy.orm import Session

from ..exceptions import InvalidOperationError, ResourceNotFoundError
from ..models import Facility
from ..repositories.facility_repository import FacilityRepository
from ..schemas import FacilityCreate, FacilityUpdate
from ..utils.pagination import check_page_in_range, paginate
from ..utils.search import FACILITY_SEARCH_FIELDS, build_filter_clause, parse_filters
from .tag_resolver import TagResolver, TagStore
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


class LocationLookup(Protocol):
    def get(self, location_id: int) -> Optional[Any]: ...


class FacilityService:

    def __init__(
        self,
        db: Session,
        facilities: FacilityRepository,
        locations: LocationLookup,
        tags: TagStore,
    ):
        self.db = db
        self.facilities = facilities
        self.locations = locations
        self.tags = tags
        self.resolver = TagResolver(tags)

    def _require_location(self, location_id: int) -> None:
        if self.locations.get(location_id) is None:
            raise ResourceNotFoundError("Location", location_id)

    def _apply_tags(self, facility: Facility, tag_ids: Optional[List[int]], tag_names: Optional[List[str]]) -> None:
        resolved = self.resolver.resolve_tag_ids(tag_ids, tag_names)
        self.facilities.replace_tags(facility, self.tags.get_many(resolved))

    def get(self, facility_id: int) -> Facility:
        facility = self.facilities.get(facility_id)
        if facility is None:
            raise ResourceNotFoundError("Facility", facility_id)
        return facility

    def list(
        self,
        page: int,
        per_page: int,
        query: Optional[str] = None,
        filter: Optional[str] = None,
        operator: Optional[str] = None,
    ) -> Tuple[List[Facility], Dict[str, int]]:
        filters = parse_filters(filter, FACILITY_SEARCH_FIELDS)
        where, params = build_filter_clause(query, filters, operator, FACILITY_SEARCH_FIELDS)

        total = self.facilities.count_matching(where, params)
        pagination = paginate(total, page, per_page)
        check_page_in_range(page, pagination["total_pages"])
        items = self.facilities.search(where, params, pagination["per_page"], pagination["offset"])
        return items, pagination

    def create(self, data: FacilityCreate) -> Facility:
        with unit_of_work(self.db, "INSERT", "facilities"):
            self._require_location(data.location_id)
            facility = self.facilities.create(data.name, data.location_id)
            self._apply_tags(facility, data.tag_ids, data.tag_names)
            facility_id = facility.id

        logger.info(f"Created facility id={facility_id} name={data.name}")
        return self._reload(facility_id)

    def update(self, facility_id: int, data: FacilityUpdate) -> Facility:
        """
        Apply a partial update. Fields that are absent, null or empty after
        cleaning are ignored. When ``tag_ids`` or ``tag_names`` is supplied the
        tag set is replaced, not merged.
        """
        supplied = data.model_dump(exclude_unset=True)
        fields = {
            key: value for key, value in supplied.items()
            if key in ("name", "location_id") and value is not None and value != ""
        }
        tags_supplied = data.tag_ids is not None or data.tag_names is not None

        with unit_of_work(self.db, "UPDATE", "facilities"):
            facility = self.get(facility_id)
            if not fields and not tags_supplied:
                raise InvalidOperationError("update facility", "no fields to update", {"facility_id": facility_id})
            if "location_id" in fields:
                self._require_location(fields["location_id"])
            if fields:
                self.facilities.update(facility, fields)
            if tags_supplied:
                self._apply_tags(facility, data.tag_ids, data.tag_names)

        logger.info(f"Updated facility id={facility_id} fields={sorted(fields)} tags_replaced={tags_supplied}")
        return self._reload(facility_id)

    def delete(self, facility_id: int) -> None:
        with unit_of_work(self.db, "DELETE", "facilities"):
            facility = self.get(facility_id)
            self.facilities.delete(facility)
        logger.info(f"Deleted facility id={facility_id}")

    def _reload(self, facility_id: int) -> Facility:
        self.db.expire_all()
        return self.get(facility_id)
