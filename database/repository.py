import logging

from sqlalchemy.orm import Session

from database.repositories.coordination_request import CoordinationRequestRepository
from database.repositories.recommendation import RecommendationRepository
from database.repositories.evidence import EvidenceRepository
from database.repositories.participant import ParticipantRepository

logger = logging.getLogger(__name__)


class CareRepository:
    """Aggregate of the per-table repositories sharing one Session."""

    def __init__(self, db: Session):
        self.db = db
        self.requests = CoordinationRequestRepository(db)
        self.recommendations = RecommendationRepository(db)
        self.evidence = EvidenceRepository(db)
        self.participants = ParticipantRepository(db)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
