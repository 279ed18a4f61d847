import logging
from typing import Dict, Iterable, Tuple

from sqlalchemy import select, func, case

from core.recommender.hydrator import evidence_key
from core.recommender.models import EvidenceCounts
from database.models import EvidenceRef
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class EvidenceRepository(BaseRepository):
    def count_for_entities(self, entities: Iterable[Tuple[str, str]]) -> Dict[str, EvidenceCounts]:
        """Active evidence counts keyed "entity_type:entity_id".

        Entities with no evidence are absent from the result.
        """
        ids_by_type: Dict[str, set] = {}
        for entity_type, entity_id in entities:
            entity_uuid = to_uuid(entity_id)
            if entity_uuid is not None:
                ids_by_type.setdefault(entity_type, set()).add(entity_uuid)

        counts: Dict[str, EvidenceCounts] = {}
        for entity_type, ids in ids_by_type.items():
            stmt = (
                select(
                    EvidenceRef.entity_id,
                    func.count(EvidenceRef.id),
                    func.sum(case((EvidenceRef.verified == True, 1), else_=0)),
                )
                .where(
                    EvidenceRef.entity_type == entity_type,
                    EvidenceRef.entity_id.in_(ids),
                    EvidenceRef.active == True,
                )
                .group_by(EvidenceRef.entity_id)
            )
            for entity_id, total, verified in self.db.execute(stmt).all():
                counts[evidence_key(entity_type, entity_id)] = EvidenceCounts(
                    total=int(total or 0),
                    verified=int(verified or 0),
                )
        return counts
