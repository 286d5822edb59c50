"""
Data access for the tags table.
"""
from typing import Iterable, List, Optional

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session

from ..models import Tag, facility_tags
from .base import storage_errors


class TagRepository:
    """Repository for tags. Also serves as the ``TagStore`` of the tag resolver."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, tag_id: int) -> Optional[Tag]:
        with storage_errors("SELECT", "tags", id=tag_id):
            return self.db.get(Tag, tag_id)

    def get_by_name(self, name: str) -> Optional[Tag]:
        # Exact, case-sensitive match
        with storage_errors("SELECT", "tags", name=name):
            return self.db.scalar(select(Tag).where(Tag.name == name))

    def get_many(self, tag_ids: Iterable[int]) -> List[Tag]:
        ids = sorted(set(tag_ids))
        if not ids:
            return []
        with storage_errors("SELECT", "tags", ids=ids):
            return list(self.db.scalars(select(Tag).where(Tag.id.in_(ids)).order_by(Tag.id)))

    def find_missing_ids(self, tag_ids: Iterable[int]) -> List[int]:
        wanted = set(tag_ids)
        if not wanted:
            return []
        with storage_errors("SELECT", "tags", ids=sorted(wanted)):
            found = set(self.db.scalars(select(Tag.id).where(Tag.id.in_(wanted))))
        return sorted(wanted - found)

    def list(self, limit: int, offset: int) -> List[Tag]:
        with storage_errors("SELECT", "tags"):
            stmt = select(Tag).order_by(Tag.id).limit(limit).offset(offset)
            return list(self.db.scalars(stmt))

    def count(self) -> int:
        with storage_errors("COUNT", "tags"):
            return self.db.scalar(select(func.count()).select_from(Tag))

    def create(self, name: str) -> Tag:
        with storage_errors("INSERT", "tags", name=name):
            tag = Tag(name=name)
            self.db.add(tag)
            self.db.flush()
            return tag

    def update(self, tag: Tag, name: str) -> Tag:
        with storage_errors("UPDATE", "tags", id=tag.id):
            tag.name = name
            self.db.flush()
            return tag

    def delete(self, tag: Tag) -> None:
        with storage_errors("DELETE", "tags", id=tag.id):
            self.db.delete(tag)
            self.db.flush()

    def is_used_by_facilities(self, tag_id: int) -> bool:
        with storage_errors("SELECT", "facility_tags", tag_id=tag_id):
            return bool(self.db.scalar(select(exists().where(facility_tags.c.tag_id == tag_id))))

    def is_name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        with storage_errors("SELECT", "tags", name=name):
            stmt = select(Tag.id).where(Tag.name == name)
            if exclude_id is not None:
                stmt = stmt.where(Tag.id != exclude_id)
            return self.db.scalar(stmt) is not None
