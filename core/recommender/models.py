#!/usr/bin/env python3
"""
Recommender Models - display cards and grouped pipeline output.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Literal

from core.scorer.models import MatchFactor, ScoreBreakdown, ScoredRecommendation

ConfidenceColor = Literal["green", "amber", "red"]


@dataclass
class EvidenceCounts:
    total: int = 0
    verified: int = 0


@dataclass
class CardOrganisation:
    id: str
    name: str
    org_type: str = "care"
    service_types: List[str] = field(default_factory=list)
    service_area_tokens: List[str] = field(default_factory=list)
    location: Optional[Dict[str, float]] = None
    verified: bool = False
    active: bool = True
    worker_count: int = 0
    reliability_score: float = 0.0
    wav_available: bool = False
    has_transfer_assist: bool = False
    has_manual_handling: bool = False
    total_vehicles: int = 0
    vehicle_types: List[str] = field(default_factory=list)


@dataclass
class CardWorker:
    id: str
    name: str
    worker_role: str
    capabilities: List[str] = field(default_factory=list)
    can_drive: bool = False
    clearance_status: str = "pending"
    clearance_current: bool = False


@dataclass
class CardVerification:
    availability_confirmed: bool = False
    vehicle_available: Optional[bool] = None
    clearance_current: Optional[bool] = None
    org_pool_allowed: bool = True
    unknowns: List[str] = field(default_factory=list)
    evidence_counts: EvidenceCounts = field(default_factory=EvidenceCounts)


@dataclass
class RecommendationCard:
    """ScoredRecommendation fields plus hydrated sub-objects the UI renders directly."""
    organisation_id: str
    worker_id: Optional[str]
    vehicle_id: Optional[str]
    rank: int
    score: float
    confidence: str
    match_factors: List[MatchFactor]
    score_breakdown: Optional[ScoreBreakdown]
    matched_service_types: List[str]
    matched_capabilities: List[str]
    distance_km: Optional[float]
    reasoning: str
    unknowns: List[str]
    evidence_refs: List[str]
    organisation: CardOrganisation
    worker: Optional[CardWorker]
    verification: CardVerification
    label: str
    confidence_color: ConfidenceColor


@dataclass
class SplitRecommendations:
    care: List[RecommendationCard] = field(default_factory=list)
    transport: List[RecommendationCard] = field(default_factory=list)


@dataclass
class RecommendationMeta:
    total_candidates_searched: int
    total_verified: int
    total_returned: int
    generated_at: str


@dataclass
class GroupedRecommendations:
    request_id: str
    request_type: str
    combined: List[RecommendationCard]
    split: SplitRecommendations
    meta: RecommendationMeta


@dataclass
class RecommendationGroups:
    """Ranked but not yet hydrated buckets produced by the grouper."""
    combined: List[ScoredRecommendation] = field(default_factory=list)
    care: List[ScoredRecommendation] = field(default_factory=list)
    transport: List[ScoredRecommendation] = field(default_factory=list)

    def all(self) -> List[ScoredRecommendation]:
        return self.combined + self.care + self.transport


@dataclass
class ReorderResult:
    recommendations: List[ScoredRecommendation]
    reordered_at: str
    changes_applied: List[str] = field(default_factory=list)
    moved_organisation_ids: List[str] = field(default_factory=list)
