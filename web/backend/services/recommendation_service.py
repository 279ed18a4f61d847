#!/usr/bin/env python3
"""
Recommendation service - business logic behind the recommendation endpoints.
"""

import logging
from dataclasses import asdict

from core.app_context import AppContext
from core.scorer.models import (
    DynamicRiskContext,
    MatchFactor,
    OutcomeHistory,
    ScoreBreakdown,
    ScoredRecommendation,
)
from core.recommender.reorder import reorder_recommendations
from pipeline.errors import PipelineError
from pipeline.runner import run_pipeline
from ..exceptions import translate_pipeline_error
from ..models.requests import DynamicContextPayload, RecommendationPayload, ReorderRequest
from ..models.responses import GroupedRecommendationsResponse, ReorderResponse

logger = logging.getLogger(__name__)


def to_scored_recommendation(payload: RecommendationPayload) -> ScoredRecommendation:
    breakdown = None
    if payload.score_breakdown is not None:
        breakdown = ScoreBreakdown(**payload.score_breakdown.model_dump())
    return ScoredRecommendation(
        organisation_id=payload.organisation_id,
        organisation_name=payload.organisation_name,
        score=payload.score,
        confidence=payload.confidence,
        match_factors=[MatchFactor(f.name, f.score, f.explanation) for f in payload.match_factors],
        score_breakdown=breakdown,
        worker_id=payload.worker_id,
        worker_name=payload.worker_name,
        vehicle_id=payload.vehicle_id,
        rank=payload.rank,
        matched_service_types=list(payload.matched_service_types),
        matched_capabilities=list(payload.matched_capabilities),
        distance_km=payload.distance_km,
        reasoning=payload.reasoning,
        unknowns=list(payload.unknowns),
        evidence_refs=list(payload.evidence_refs),
    )


def to_dynamic_context(payload: DynamicContextPayload) -> DynamicRiskContext:
    history = None
    if payload.outcome_history is not None:
        history = OutcomeHistory(
            completed_bookings=payload.outcome_history.completed_bookings,
            positive_rate=payload.outcome_history.positive_rate,
        )
    return DynamicRiskContext(
        emotional_state=payload.emotional_state,
        needs_urgency=payload.needs_urgency,
        functional_needs=list(payload.functional_needs),
        continuity_worker=payload.continuity_worker,
        previous_positive_experience=payload.previous_positive_experience,
        outcome_history=history,
        preference_weights=dict(payload.preference_weights) if payload.preference_weights else None,
    )


class RecommendationService:
    """Service for running and re-ranking recommendations."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    def run(self, request_id: str) -> GroupedRecommendationsResponse:
        try:
            result = run_pipeline(self.ctx, request_id)
        except PipelineError as e:
            raise translate_pipeline_error(e) from e
        return GroupedRecommendationsResponse.model_validate(asdict(result))

    def reorder(self, request: ReorderRequest) -> ReorderResponse:
        recommendations = [to_scored_recommendation(r) for r in request.recommendations]
        context = to_dynamic_context(request.updated_context)
        weights = self.ctx.config.matching.scorer.weights()

        result = reorder_recommendations(
            recommendations,
            context,
            match_urgency=request.match_urgency,
            weights=weights,
        )
        return ReorderResponse.model_validate(asdict(result))
