import logging
from typing import Any, Optional

from sqlalchemy import select

from database.models import CoordinationRequest
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class CoordinationRequestRepository(BaseRepository):
    def get_by_id(self, request_id: Any) -> Optional[CoordinationRequest]:
        request_uuid = to_uuid(request_id)
        if request_uuid is None:
            return None
        stmt = select(CoordinationRequest).where(CoordinationRequest.id == request_uuid)
        return self.db.execute(stmt).scalar_one_or_none()
