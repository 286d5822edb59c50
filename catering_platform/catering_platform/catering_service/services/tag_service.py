from typing import Dict, List, Tuple
import logging

from sqlalchemy.orm import Session

from ..exceptions import DuplicateResourceError, ResourceInUseError, ResourceNotFoundError
from ..models import Tag
from ..repositories.tag_repository import TagRepository
from ..schemas import TagCreate, TagUpdate
from ..utils.pagination import check_page_in_range, paginate
from .unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


class TagService:

    def __init__(self, db: Session, tags: TagRepository):
        self.db = db
        self.tags = tags

    def get(self, tag_id: int) -> Tag:
        tag = self.tags.get(tag_id)
        if tag is None:
            raise ResourceNotFoundError("Tag", tag_id)
        return tag

    def list(self, page: int, per_page: int) -> Tuple[List[Tag], Dict[str, int]]:
        pagination = paginate(self.tags.count(), page, per_page)
        check_page_in_range(page, pagination["total_pages"])
        return self.tags.list(pagination["per_page"], pagination["offset"]), pagination

    def create(self, data: TagCreate) -> Tag:
        with unit_of_work(self.db, "INSERT", "tags"):
            if self.tags.is_name_taken(data.name):
                raise DuplicateResourceError("Tag", "name", data.name)
            tag_id = self.tags.create(data.name).id
        logger.info(f"Created tag id={tag_id} name={data.name}")
        return self.get(tag_id)

    def update(self, tag_id: int, data: TagUpdate) -> Tag:
        with unit_of_work(self.db, "UPDATE", "tags"):
            tag = self.get(tag_id)
            if self.tags.is_name_taken(data.name, exclude_id=tag_id):
                raise DuplicateResourceError("Tag", "name", data.name)
            self.tags.update(tag, data.name)
        logger.info(f"Updated tag id={tag_id} name={data.name}")
        return self.get(tag_id)

    def delete(self, tag_id: int) -> None:
        with unit_of_work(self.db, "DELETE", "tags"):
            tag = self.get(tag_id)
            if self.tags.is_used_by_facilities(tag_id):
                raise ResourceInUseError("tag", tag_id, "facilities")
            self.tags.delete(tag)
        logger.info(f"Deleted tag id={tag_id}")
