from database.repositories.base import BaseRepository
from database.repositories.coordination_request import CoordinationRequestRepository
from database.repositories.recommendation import RecommendationRepository
from database.repositories.evidence import EvidenceRepository
from database.repositories.participant import ParticipantRepository, SqlDynamicContextProvider
from database.repositories.provider import SqlAuthoritativeStore

__all__ = [
    'BaseRepository',
    'CoordinationRequestRepository',
    'RecommendationRepository',
    'EvidenceRepository',
    'ParticipantRepository',
    'SqlDynamicContextProvider',
    'SqlAuthoritativeStore',
]
