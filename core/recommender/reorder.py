#!/usr/bin/env python3
"""
Reorder Engine - fast re-ranking without a full recompute.

When the dynamic context changes (urgency, emotional state, preferences),
only the context-sensitive factors are recalculated and the existing
recommendations re-ranked. Search and verification are skipped entirely.

Recomputed: preference_alignment, urgency_bonus, emotional_comfort
Preserved: proximity, capability_match, availability, verification_status,
reliability
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional
import logging

from core.scorer import factors as factor_calculations
from core.scorer.models import (
    BASE_FACTORS,
    DynamicRiskContext,
    MatchFactor,
    ScoredRecommendation,
    ScoreWeights,
)
from core.scorer.ranking import rank_recommendations
from core.scorer.service import combine_score
from core.recommender.models import ReorderResult

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5


def _replace_factors(factors: List[MatchFactor], updated: List[MatchFactor]) -> List[MatchFactor]:
    """Swap factors by name in place; append any that were absent."""
    result = list(factors)
    for new_factor in updated:
        for index, old in enumerate(result):
            if old.name == new_factor.name:
                result[index] = new_factor
                break
        else:
            result.append(new_factor)
    return result


def rescore_recommendation(
    rec: ScoredRecommendation,
    context: DynamicRiskContext,
    match_urgency: str,
    weights: ScoreWeights
) -> ScoredRecommendation:
    stored: Dict[str, MatchFactor] = {f.name: f for f in rec.match_factors}

    base_factors = [
        stored.get(name) or MatchFactor(name, NEUTRAL_SCORE)
        for name in BASE_FACTORS
    ]
    availability_confirmed = stored["availability"].score > 0.5 if "availability" in stored else False

    capabilities = rec.matched_capabilities or []
    preference = factor_calculations.preference_alignment_factor(
        capabilities,
        context.functional_needs,
        "sensory_support" in context.functional_needs,
        context.continuity_worker,
        context.preference_weights,
    )
    urgency = factor_calculations.urgency_bonus_factor(
        match_urgency, context.needs_urgency, availability_confirmed
    )
    emotional = factor_calculations.emotional_comfort_factor(
        context.emotional_state,
        "driving" in capabilities,
        "positive_behaviour_support" in capabilities,
        context.previous_positive_experience,
    )
    reliability = stored.get("reliability") or MatchFactor("reliability", NEUTRAL_SCORE)

    score, breakdown = combine_score(base_factors, preference, reliability, urgency, emotional, weights)

    return replace(
        rec,
        score=score,
        match_factors=_replace_factors(rec.match_factors, [preference, urgency, emotional]),
        score_breakdown=breakdown,
        matched_capabilities=list(rec.matched_capabilities),
        matched_service_types=list(rec.matched_service_types),
        unknowns=list(rec.unknowns),
        evidence_refs=list(rec.evidence_refs),
    )


def reorder_recommendations(
    recommendations: List[ScoredRecommendation],
    updated_context: DynamicRiskContext,
    match_urgency: str = "standard",
    weights: Optional[ScoreWeights] = None
) -> ReorderResult:
    """Re-rank previously scored recommendations against a new context.

    Inputs are not mutated. Performs no I/O.
    """
    reordered_at = datetime.now(timezone.utc).isoformat()
    if not recommendations:
        return ReorderResult(recommendations=[], reordered_at=reordered_at)

    weights = weights or ScoreWeights()
    rescored = [
        rescore_recommendation(rec, updated_context, match_urgency, weights)
        for rec in recommendations
    ]
    ranked = rank_recommendations(rescored)

    old_order = [r.organisation_id for r in recommendations]
    new_order = [r.organisation_id for r in ranked]
    moved = [org_id for index, org_id in enumerate(old_order) if new_order[index] != org_id]

    changes: List[str] = []
    if moved:
        changes.append(f"{len(moved)} recommendations moved")
    changes.append(f"urgency={updated_context.needs_urgency}")
    changes.append(f"emotional={updated_context.emotional_state}")

    logger.info(f"Reordered {len(ranked)} recommendations ({len(moved)} moved)")

    return ReorderResult(
        recommendations=ranked,
        reordered_at=reordered_at,
        changes_applied=changes,
        moved_organisation_ids=moved,
    )
