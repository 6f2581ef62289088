from typing import Generator
from sqlalchemy.orm import Session
from madrasa_portal.core.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.
    One session per request, closed once the request is done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
