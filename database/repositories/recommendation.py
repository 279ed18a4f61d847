import logging
from typing import Any, Dict, List

from sqlalchemy import select, delete

from database.models import Recommendation
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)

UUID_COLUMNS = ('organisation_id', 'worker_id', 'vehicle_id')


class RecommendationRepository(BaseRepository):
    def replace_for_request(self, request_id: Any, rows: List[Dict[str, Any]]) -> int:
        """Delete every recommendation for the request, then insert `rows`.

        Retried pipeline runs therefore never duplicate rows.
        """
        request_uuid = to_uuid(request_id)
        self.db.execute(
            delete(Recommendation).where(Recommendation.coordination_request_id == request_uuid)
        )
        for row in rows:
            values = dict(row)
            for key in UUID_COLUMNS:
                values[key] = to_uuid(values.get(key))
            self.db.add(Recommendation(coordination_request_id=request_uuid, **values))
        self.db.flush()
        logger.info(f"Persisted {len(rows)} recommendations for request {request_id}")
        return len(rows)

    def get_for_request(self, request_id: Any) -> List[Recommendation]:
        stmt = (
            select(Recommendation)
            .where(Recommendation.coordination_request_id == to_uuid(request_id))
            .order_by(Recommendation.bucket, Recommendation.rank)
        )
        return self.db.execute(stmt).scalars().all()
