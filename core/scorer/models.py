#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Literal

Confidence = Literal["verified", "likely", "needs_verification"]
NeedsUrgency = Literal["routine", "soon", "urgent"]

CONFIDENCE_LEVELS: Tuple[str, ...] = ("verified", "likely", "needs_verification")
NEEDS_URGENCY_LEVELS: Tuple[str, ...] = ("routine", "soon", "urgent")

# Factor names, in the order the scorer emits them.
BASE_FACTORS: Tuple[str, ...] = (
    "proximity",
    "capability_match",
    "availability",
    "verification_status",
)
CONTEXT_FACTORS: Tuple[str, ...] = (
    "preference_alignment",
    "reliability",
    "urgency_bonus",
    "emotional_comfort",
)
FACTOR_NAMES: Tuple[str, ...] = BASE_FACTORS + CONTEXT_FACTORS

# Factors the reorder path recomputes from a new context.
REORDER_FACTORS: Tuple[str, ...] = (
    "preference_alignment",
    "urgency_bonus",
    "emotional_comfort",
)


@dataclass(frozen=True)
class ScoreWeights:
    """Weight vector for the context-aware formula."""
    base_match: float = 1.0
    preference_alignment: float = 0.4
    reliability: float = 0.3
    urgency_bonus: float = 0.2
    emotional_comfort: float = 0.1

    @property
    def total(self) -> float:
        return (
            self.base_match
            + self.preference_alignment
            + self.reliability
            + self.urgency_bonus
            + self.emotional_comfort
        )

    def as_dict(self) -> Dict[str, float]:
        return {
            'base_match': self.base_match,
            'preference_alignment': self.preference_alignment,
            'reliability': self.reliability,
            'urgency_bonus': self.urgency_bonus,
            'emotional_comfort': self.emotional_comfort,
        }


@dataclass(frozen=True)
class MatchFactor:
    """One named scoring dimension, normalized to [0, 1]."""
    name: str
    score: float
    explanation: str = ""


@dataclass
class ScoreBreakdown:
    """Weighted components as 0-100 sub-scores plus the weights used."""
    base_match: float
    preference_alignment: float
    reliability: float
    urgency_bonus: float
    emotional_comfort: float
    weights: Dict[str, float] = field(default_factory=dict)


@dataclass
class OutcomeHistory:
    completed_bookings: int
    positive_rate: float


@dataclass
class DynamicRiskContext:
    """Volatile per-run signals that shift ranking without re-searching."""
    emotional_state: str = "calm"
    needs_urgency: str = "routine"
    functional_needs: List[str] = field(default_factory=list)
    continuity_worker: bool = False
    previous_positive_experience: bool = False
    outcome_history: Optional[OutcomeHistory] = None
    preference_weights: Optional[Dict[str, float]] = None


@dataclass
class ScoredRecommendation:
    """A scored candidate. rank is 0 until the ranker assigns it."""
    organisation_id: str
    organisation_name: str
    score: float
    confidence: Confidence
    match_factors: List[MatchFactor] = field(default_factory=list)
    score_breakdown: Optional[ScoreBreakdown] = None
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    vehicle_id: Optional[str] = None
    rank: int = 0
    matched_service_types: List[str] = field(default_factory=list)
    matched_capabilities: List[str] = field(default_factory=list)
    distance_km: Optional[float] = None
    reasoning: str = ""
    unknowns: List[str] = field(default_factory=list)
    evidence_refs: List[str] = field(default_factory=list)

    def factor(self, name: str) -> Optional[MatchFactor]:
        for f in self.match_factors:
            if f.name == name:
                return f
        return None
