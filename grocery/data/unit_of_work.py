# grocery/data/unit_of_work.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from grocery.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Jedna transakcja na use case.
    Commit gdy blok przejdzie, rollback przy dowolnym wyjatku.
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.debug("Rolling back unit of work")
        db.rollback()
        raise
