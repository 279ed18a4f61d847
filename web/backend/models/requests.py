#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

import uuid

from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Literal


class MatchFactorPayload(BaseModel):
    name: str
    score: float = Field(ge=0, le=1)
    explanation: str = ""


class ScoreBreakdownPayload(BaseModel):
    base_match: float
    preference_alignment: float
    reliability: float
    urgency_bonus: float
    emotional_comfort: float
    weights: Dict[str, float] = Field(default_factory=dict)


class RecommendationPayload(BaseModel):
    """A previously returned recommendation, sent back for re-ranking."""
    organisation_id: str
    organisation_name: str = ""
    score: float = Field(ge=0, le=100)
    confidence: Literal["verified", "likely", "needs_verification"] = "needs_verification"
    match_factors: List[MatchFactorPayload] = Field(default_factory=list)
    score_breakdown: Optional[ScoreBreakdownPayload] = None
    worker_id: Optional[str] = None
    worker_name: Optional[str] = None
    vehicle_id: Optional[str] = None
    rank: int = 0
    matched_service_types: List[str] = Field(default_factory=list)
    matched_capabilities: List[str] = Field(default_factory=list)
    distance_km: Optional[float] = None
    reasoning: str = ""
    unknowns: List[str] = Field(default_factory=list)
    evidence_refs: List[str] = Field(default_factory=list)


class OutcomeHistoryPayload(BaseModel):
    completed_bookings: int = Field(ge=0)
    positive_rate: float = Field(ge=0, le=1)


class DynamicContextPayload(BaseModel):
    """Updated participant context used by the reorder endpoint."""
    emotional_state: str = Field(default="calm", description="calm, anxious, distressed, ...")
    needs_urgency: Literal["routine", "soon", "urgent"] = "routine"
    functional_needs: List[str] = Field(default_factory=list)
    continuity_worker: bool = False
    previous_positive_experience: bool = False
    outcome_history: Optional[OutcomeHistoryPayload] = None
    preference_weights: Optional[Dict[str, float]] = None


class ReorderRequest(BaseModel):
    """Request to re-rank recommendations without re-running search."""
    recommendations: List[RecommendationPayload] = Field(
        ...,
        min_length=1,
        description="Recommendations previously returned by the run endpoint"
    )
    updated_context: DynamicContextPayload
    match_urgency: Literal["low", "standard", "urgent", "emergency"] = Field(
        default="standard",
        description="Urgency of the original coordination request"
    )


class OutcomeRequest(BaseModel):
    """Post-service feedback for a completed booking."""
    participant_profile_id: uuid.UUID
    organisation_id: uuid.UUID
    worker_id: Optional[uuid.UUID] = None
    comfort_rating: int = Field(..., ge=1, le=5)
    accessibility_met: bool
    continuity_preference: Literal["same_worker", "same_org", "no_preference", "different_worker"] = "no_preference"
    emotional_aftercare_needed: bool = False
    safety_concerns: Optional[str] = Field(default=None, max_length=5000)
    additional_needs_noted: List[str] = Field(default_factory=list)
    would_use_again: bool = True
