#!/usr/bin/env python3
"""
Matcher Models - Request, candidate and verification data structures.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple, Literal

RequestType = Literal["care", "transport", "both"]
OrgType = Literal["care", "transport", "both"]
UrgencyLevel = Literal["low", "standard", "urgent", "emergency"]

REQUEST_TYPES: Tuple[str, ...] = ("care", "transport", "both")
URGENCY_LEVELS: Tuple[str, ...] = ("low", "standard", "urgent", "emergency")
COORDINATION_STATUSES: Tuple[str, ...] = (
    "open", "matching", "matched", "booked", "completed", "cancelled",
)
TERMINAL_STATUSES: Tuple[str, ...] = ("cancelled", "completed")

DEFAULT_MAX_DISTANCE_KM = 25.0


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class MatchRequirements:
    """Participant-side constraints the matching engine must respect."""
    wheelchair_accessible: bool = False
    required_capabilities: Tuple[str, ...] = ()
    gender_preference: Optional[str] = None
    language_preference: Optional[str] = None
    special_qualifications: Tuple[str, ...] = ()
    verified_organisations_only: bool = False


@dataclass(frozen=True)
class MatchSpec:
    """Structured request for one matching run. Immutable."""
    participant_profile_id: str
    request_type: RequestType
    service_types: Tuple[str, ...] = ()
    urgency: UrgencyLevel = "standard"
    location: Optional[Coordinates] = None
    destination: Optional[Coordinates] = None
    max_distance_km: float = DEFAULT_MAX_DISTANCE_KM
    preferred_start: Optional[datetime] = None
    preferred_end: Optional[datetime] = None
    requirements: Optional[MatchRequirements] = None
    notes: Optional[str] = None

    @property
    def required_capabilities(self) -> Tuple[str, ...]:
        return self.requirements.required_capabilities if self.requirements else ()

    @property
    def requires_wheelchair_access(self) -> bool:
        return bool(self.requirements and self.requirements.wheelchair_accessible)


@dataclass
class WorkerCandidate:
    """Worker document returned by the candidate source."""
    entity_id: str
    name: str
    organisation_id: str
    organisation_name: str = ""
    worker_role: str = "support_worker"
    capabilities: List[str] = field(default_factory=list)
    service_area_tokens: List[str] = field(default_factory=list)
    location: Optional[Tuple[float, float]] = None
    can_drive: bool = False
    clearance_status: str = "pending"
    clearance_current: bool = False
    organisation_verified: bool = False
    active: bool = True
    reliability_score: float = 0.0
    text_score: float = 0.0
    geo_distance_km: Optional[float] = None


@dataclass
class OrganisationCandidate:
    """Organisation document returned by the candidate source."""
    entity_id: str
    name: str
    org_type: OrgType = "care"
    service_types: List[str] = field(default_factory=list)
    service_area_tokens: List[str] = field(default_factory=list)
    location: Optional[Tuple[float, float]] = None
    verified: bool = False
    active: bool = True
    worker_count: int = 0
    reliability_score: float = 0.0
    wav_available: bool = False
    has_transfer_assist: bool = False
    has_manual_handling: bool = False
    total_vehicles: int = 0
    vehicle_types: List[str] = field(default_factory=list)
    text_score: float = 0.0
    geo_distance_km: Optional[float] = None


@dataclass
class VerificationResult:
    """Hard-constraint outcome for one candidate.

    ``None`` on vehicle_available / clearance_current means not applicable or
    not determinable; it is never the same as ``False``.
    """
    availability_confirmed: bool
    vehicle_available: Optional[bool] = None
    clearance_current: Optional[bool] = None
    org_pool_allowed: bool = True
    unknowns: List[str] = field(default_factory=list)


@dataclass
class VerifiedWorker:
    candidate: WorkerCandidate
    verification: VerificationResult


@dataclass
class VerifiedOrganisation:
    candidate: OrganisationCandidate
    verification: VerificationResult
    workers: List[VerifiedWorker] = field(default_factory=list)

    @property
    def entity_id(self) -> str:
        return self.candidate.entity_id

    @property
    def has_driving_worker(self) -> bool:
        return any(w.candidate.can_drive for w in self.workers)

    def capabilities(self) -> List[str]:
        """Union of worker capabilities, first-seen order."""
        seen: List[str] = []
        for worker in self.workers:
            for cap in worker.candidate.capabilities:
                if cap not in seen:
                    seen.append(cap)
        return seen
