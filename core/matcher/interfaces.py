"""
Matching Collaborator Interfaces - ports the engine depends on.

Concrete adapters live next to the infrastructure they wrap:
- TypesenseCandidateSource (core.matcher.search)
- SqlAuthoritativeStore (database.repositories.provider)
- SqlDynamicContextProvider (database.repositories.participant)
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from core.matcher.models import MatchSpec, OrganisationCandidate, WorkerCandidate
from core.scorer.models import DynamicRiskContext


class CandidateSource(ABC):
    """
    Abstract interface for the full-text / geo candidate search.
    """

    @abstractmethod
    def search_organisations(self, spec: MatchSpec) -> List[OrganisationCandidate]:
        """Return organisation candidates, best first."""
        pass

    @abstractmethod
    def search_workers(self, spec: MatchSpec) -> List[WorkerCandidate]:
        """Return worker candidates, best first."""
        pass


class AuthoritativeStore(ABC):
    """
    Abstract interface for hard-constraint lookups.

    Every query answers True, False, or None when the fact cannot be
    determined. Raising is reserved for the store itself being unavailable.
    """

    @abstractmethod
    def worker_available(
        self,
        worker_id: str,
        start: datetime,
        end: datetime
    ) -> Optional[bool]:
        pass

    @abstractmethod
    def vehicle_available(
        self,
        organisation_id: str,
        requires_wav: bool,
        start: Optional[datetime],
        end: Optional[datetime]
    ) -> Optional[bool]:
        pass

    @abstractmethod
    def worker_clearance_current(self, worker_id: str) -> Optional[bool]:
        pass

    @abstractmethod
    def organisation_in_pool(
        self,
        organisation_id: str,
        participant_profile_id: str
    ) -> Optional[bool]:
        """None means the participant has no restricted pool."""
        pass


class DynamicContextProvider(ABC):
    """
    Abstract interface for the volatile per-participant scoring context.
    """

    @abstractmethod
    def get_context(self, participant_profile_id: str) -> Optional[DynamicRiskContext]:
        pass
