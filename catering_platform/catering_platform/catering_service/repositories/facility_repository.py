"""
Data access for facilities and their tag associations.
"""
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy.sql import Select

from ..models import Facility, Location, Tag, facility_tags
from .base import storage_errors


class FacilityRepository:
    """Repository for facilities. Never commits; the calling service owns the transaction."""

    def __init__(self, db: Session):
        self.db = db

    def _loaded(self) -> Select:
        return select(Facility).options(joinedload(Facility.location), selectinload(Facility.tags))

    def _matching_ids(self, where_clause: str, params: Dict[str, Any]) -> Select:
        # Page and count queries are both built from this one statement
        return (
            select(Facility.id)
            .select_from(Facility)
            .outerjoin(Location, Facility.location_id == Location.id)
            .outerjoin(facility_tags, facility_tags.c.facility_id == Facility.id)
            .outerjoin(Tag, facility_tags.c.tag_id == Tag.id)
            .where(text(where_clause).bindparams(**params))
            .distinct()
        )

    def get(self, facility_id: int) -> Optional[Facility]:
        with storage_errors("SELECT", "facilities", id=facility_id):
            return self.db.scalar(self._loaded().where(Facility.id == facility_id))

    def get_many(self, facility_ids: Iterable[int]) -> List[Facility]:
        ids = sorted(set(facility_ids))
        if not ids:
            return []
        with storage_errors("SELECT", "facilities", ids=ids):
            return list(self.db.scalars(select(Facility).where(Facility.id.in_(ids)).order_by(Facility.id)))

    def find_missing_ids(self, facility_ids: Iterable[int]) -> List[int]:
        wanted = set(facility_ids)
        if not wanted:
            return []
        with storage_errors("SELECT", "facilities", ids=sorted(wanted)):
            found = set(self.db.scalars(select(Facility.id).where(Facility.id.in_(wanted))))
        return sorted(wanted - found)

    def search(self, where_clause: str, params: Dict[str, Any], limit: int, offset: int) -> List[Facility]:
        with storage_errors("SELECT", "facilities", where=where_clause):
            ids = self._matching_ids(where_clause, params).subquery()
            stmt = (
                self._loaded()
                .where(Facility.id.in_(select(ids.c.id)))
                .order_by(Facility.id)
                .limit(limit)
                .offset(offset)
            )
            return list(self.db.scalars(stmt).unique())

    def count_matching(self, where_clause: str, params: Dict[str, Any]) -> int:
        with storage_errors("COUNT", "facilities", where=where_clause):
            ids = self._matching_ids(where_clause, params).subquery()
            return self.db.scalar(select(func.count()).select_from(ids))

    def create(self, name: str, location_id: int) -> Facility:
        with storage_errors("INSERT", "facilities", name=name, location_id=location_id):
            facility = Facility(name=name, location_id=location_id)
            self.db.add(facility)
            self.db.flush()
            return facility

    def update(self, facility: Facility, fields: Dict[str, Any]) -> Facility:
        with storage_errors("UPDATE", "facilities", id=facility.id):
            for key, value in fields.items():
                setattr(facility, key, value)
            self.db.flush()
            return facility

    def replace_tags(self, facility: Facility, tags: List[Tag]) -> None:
        """Set the facility's tag set to exactly ``tags``."""
        with storage_errors("UPDATE", "facility_tags", facility_id=facility.id):
            facility.tags = list(tags)
            self.db.flush()

    def delete(self, facility: Facility) -> None:
        # Association rows go with the facility through the ORM relationships
        with storage_errors("DELETE", "facilities", id=facility.id):
            self.db.delete(facility)
            self.db.flush()
