from contextlib import contextmanager
from typing import Any, Iterator
import logging

from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str, table: str, **context: Any) -> Iterator[None]:
    """Wrap driver failures in ``DatabaseError`` naming the operation and table."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            "Database operation failed: operation=%s table=%s context=%s error=%s",
            operation, table, context, e
        )
        raise DatabaseError(operation, table, str(getattr(e, "orig", None) or e), context) from e
