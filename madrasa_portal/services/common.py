import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from madrasa_portal.core import messages
from madrasa_portal.core.exceptions import ConflictException, StoreError

logger = logging.getLogger(__name__)


def commit(db: Session, action: str, conflict_message: Optional[str] = None) -> None:
    """
    Commit the session, rolling back on failure.

    Unique constraint violations become ConflictException when
    ``conflict_message`` is given; every other store failure is a StoreError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if conflict_message:
            logger.warning(f"Conflict while trying to {action}: {e.orig}")
            raise ConflictException(conflict_message) from e
        logger.error(f"❌ Failed to {action}: {e}")
        raise StoreError(messages.STORE_FAILURE) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Failed to {action}: {e}")
        raise StoreError(messages.STORE_FAILURE) from e
