"""
Reconciliation of a request's mixed tag ids and tag names into one id set.
"""
from typing import Iterable, List, Optional, Protocol, Set
import logging

from ..exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)


class StoredTag(Protocol):
    id: int
    name: str


class TagStore(Protocol):
    """The storage capability the resolver needs."""

    def get_by_name(self, name: str) -> Optional[StoredTag]: ...

    def create(self, name: str) -> StoredTag: ...

    def find_missing_ids(self, tag_ids: Iterable[int]) -> List[int]: ...

    def get_many(self, tag_ids: Iterable[int]) -> List[StoredTag]: ...


class TagResolver:

    def __init__(self, store: TagStore):
        self.store = store

    def resolve_tag_ids(
        self,
        tag_ids: Optional[Iterable[int]] = None,
        tag_names: Optional[Iterable[str]] = None,
    ) -> Set[int]:
        """
        Turn explicit tag ids and tag names into a deduplicated set of tag ids.

        Each name is looked up by exact match and created when absent. Explicit
        ids must already exist, otherwise ``ResourceNotFoundError`` is raised
        for the first missing one. Store failures propagate, so the caller
        never sees a partially resolved set.
        """
        resolved: Set[int] = set(tag_ids or ())

        missing = self.store.find_missing_ids(resolved)
        if missing:
            raise ResourceNotFoundError("Tag", missing[0])

        for name in tag_names or ():
            if not name:
                continue
            tag = self.store.get_by_name(name)
            if tag is None:
                tag = self.store.create(name)
                logger.info(f"Created tag id={tag.id} name={name}")
            resolved.add(tag.id)

        return resolved
