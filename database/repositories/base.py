import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session


def to_uuid(value: Any) -> Optional[uuid.UUID]:
    """Coerce an id to UUID; None for anything that is not a valid UUID."""
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
