from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session, operation: str, table: str) -> Iterator[Session]:
    """
    Run the enclosed writes as one transaction.

    Commits when the block finishes, rolls back on any exception. A failing
    commit is reported as ``DatabaseError``; every other exception is re-raised
    unchanged after the rollback.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Transaction rolled back: operation=%s table=%s error=%s", operation, table, e)
        raise DatabaseError(operation, table, str(getattr(e, "orig", None) or e)) from e
    except Exception:
        db.rollback()
        raise
