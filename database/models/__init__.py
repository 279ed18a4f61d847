from .base import Base
from .participant import ParticipantProfile, ParticipantPreferences, NeedsProfile, ServiceOutcome
from .provider import Organisation, Worker, Vehicle, AvailabilitySlot, ParticipantProviderPool
from .coordination import CoordinationRequest
from .recommendation import Recommendation
from .evidence import EvidenceRef

__all__ = [
    'Base',
    'ParticipantProfile',
    'ParticipantPreferences',
    'NeedsProfile',
    'ServiceOutcome',
    'Organisation',
    'Worker',
    'Vehicle',
    'AvailabilitySlot',
    'ParticipantProviderPool',
    'CoordinationRequest',
    'Recommendation',
    'EvidenceRef',
]
