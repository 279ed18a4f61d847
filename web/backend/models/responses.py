#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class MatchFactorModel(BaseModel):
    name: str
    score: float = Field(ge=0, le=1)
    explanation: str = ""


class ScoreBreakdownModel(BaseModel):
    base_match: float
    preference_alignment: float
    reliability: float
    urgency_bonus: float
    emotional_comfort: float
    weights: Dict[str, float] = Field(default_factory=dict)


class LocationModel(BaseModel):
    lat: float
    lng: float


class EvidenceCountsModel(BaseModel):
    total: int = 0
    verified: int = 0


class CardOrganisationModel(BaseModel):
    id: str
    name: str
    org_type: str
    service_types: List[str] = Field(default_factory=list)
    service_area_tokens: List[str] = Field(default_factory=list)
    location: Optional[LocationModel] = None
    verified: bool = False
    active: bool = True
    worker_count: int = 0
    reliability_score: float = 0.0
    wav_available: bool = False
    has_transfer_assist: bool = False
    has_manual_handling: bool = False
    total_vehicles: int = 0
    vehicle_types: List[str] = Field(default_factory=list)


class CardWorkerModel(BaseModel):
    id: str
    name: str
    worker_role: str
    capabilities: List[str] = Field(default_factory=list)
    can_drive: bool = False
    clearance_status: str = "pending"
    clearance_current: bool = False


class CardVerificationModel(BaseModel):
    availability_confirmed: bool = False
    vehicle_available: Optional[bool] = None
    clearance_current: Optional[bool] = None
    org_pool_allowed: bool = True
    unknowns: List[str] = Field(default_factory=list)
    evidence_counts: EvidenceCountsModel = Field(default_factory=EvidenceCountsModel)


class RecommendationCardModel(BaseModel):
    """A ranked recommendation hydrated for display."""
    organisation_id: str
    worker_id: Optional[str]
    vehicle_id: Optional[str]
    rank: int = Field(ge=1)
    score: float = Field(ge=0, le=100)
    confidence: str
    match_factors: List[MatchFactorModel]
    score_breakdown: Optional[ScoreBreakdownModel]
    matched_service_types: List[str]
    matched_capabilities: List[str]
    distance_km: Optional[float]
    reasoning: str
    unknowns: List[str]
    evidence_refs: List[str]
    organisation: CardOrganisationModel
    worker: Optional[CardWorkerModel]
    verification: CardVerificationModel
    label: str
    confidence_color: str


class SplitRecommendationsModel(BaseModel):
    care: List[RecommendationCardModel] = Field(default_factory=list)
    transport: List[RecommendationCardModel] = Field(default_factory=list)


class RecommendationMetaModel(BaseModel):
    total_candidates_searched: int
    total_verified: int
    total_returned: int
    generated_at: str


class GroupedRecommendationsResponse(BaseModel):
    """Result of a full recommendation pipeline run."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "request_type": "both",
                "combined": [],
                "split": {"care": [], "transport": []},
                "meta": {
                    "total_candidates_searched": 42,
                    "total_verified": 12,
                    "total_returned": 9,
                    "generated_at": "2026-02-01T12:00:00+00:00"
                }
            }
        }
    )

    request_id: str
    request_type: str
    combined: List[RecommendationCardModel]
    split: SplitRecommendationsModel
    meta: RecommendationMetaModel


class ScoredRecommendationModel(BaseModel):
    organisation_id: str
    organisation_name: str
    score: float = Field(ge=0, le=100)
    confidence: str
    match_factors: List[MatchFactorModel]
    score_breakdown: Optional[ScoreBreakdownModel] = None
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    vehicle_id: Optional[str] = None
    rank: int
    matched_service_types: List[str] = Field(default_factory=list)
    matched_capabilities: List[str] = Field(default_factory=list)
    distance_km: Optional[float] = None
    reasoning: str = ""
    unknowns: List[str] = Field(default_factory=list)
    evidence_refs: List[str] = Field(default_factory=list)


class ReorderResponse(BaseModel):
    """Re-ranked recommendations after a context change."""
    success: bool = True
    recommendations: List[ScoredRecommendationModel]
    reordered_at: str
    changes_applied: List[str] = Field(default_factory=list)
    moved_organisation_ids: List[str] = Field(default_factory=list)


class WeightAdjustmentModel(BaseModel):
    key: str
    delta: float
    reason: str


class OutcomeResponse(BaseModel):
    """Recorded outcome plus the preference weights it produced."""
    success: bool = True
    outcome_id: str
    booking_id: str
    sentiment: str
    weight_adjustments: List[WeightAdjustmentModel] = Field(default_factory=list)
    preference_weights: Dict[str, float] = Field(default_factory=dict)
