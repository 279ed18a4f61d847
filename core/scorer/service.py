#!/usr/bin/env python3
"""
Scoring Service - weighted multi-factor scoring with dynamic context.

    score = (base_match * w_base
             + preference_alignment * w_pref
             + reliability * w_rel
             + urgency_bonus * w_urg
             + emotional_comfort * w_emo) / sum(w) * 100

base_match is the unweighted mean of the four base factors (proximity,
capability_match, availability, verification_status). Every component is a
0-1 sub-score; the final score is 0-100 and the breakdown is kept for
transparency.
"""

from typing import List, Optional, Tuple
import logging

from core.utils import clamp, round1, intersect_ordered
from core.matcher.models import MatchSpec, VerifiedOrganisation, VerifiedWorker
from core.scorer.models import (
    DynamicRiskContext,
    MatchFactor,
    ScoreBreakdown,
    ScoredRecommendation,
    ScoreWeights,
)
from core.scorer import factors as factor_calculations
from core.scorer.confidence import assign_confidence, build_reasoning

logger = logging.getLogger(__name__)

PBS_CAPABILITY = "positive_behaviour_support"


def select_best_worker(workers: List[VerifiedWorker]) -> Optional[VerifiedWorker]:
    """First worker with confirmed availability, else the first worker."""
    if not workers:
        return None
    for worker in workers:
        if worker.verification.availability_confirmed:
            return worker
    return workers[0]


def combine_score(
    base_factors: List[MatchFactor],
    preference: MatchFactor,
    reliability: MatchFactor,
    urgency: MatchFactor,
    emotional: MatchFactor,
    weights: ScoreWeights
) -> Tuple[float, ScoreBreakdown]:
    """Weighted 0-100 score plus its breakdown.

    Shared by full scoring and the reorder path so both use one formula.
    """
    base_match = sum(f.score for f in base_factors) / len(base_factors) if base_factors else 0.5

    total_weight = weights.total or 1.0
    weighted = (
        base_match * weights.base_match
        + preference.score * weights.preference_alignment
        + reliability.score * weights.reliability
        + urgency.score * weights.urgency_bonus
        + emotional.score * weights.emotional_comfort
    ) / total_weight * 100.0

    breakdown = ScoreBreakdown(
        base_match=round1(base_match * 100),
        preference_alignment=round1(preference.score * 100),
        reliability=round1(reliability.score * 100),
        urgency_bonus=round1(urgency.score * 100),
        emotional_comfort=round1(emotional.score * 100),
        weights=weights.as_dict(),
    )
    return round1(clamp(weighted, 0.0, 100.0)), breakdown


class ScoringService:
    """
    Scores verified organisation candidates against one MatchSpec.

    Pure computation: no store or search access. The dynamic context is
    optional; defaults (calm, routine, no needs) apply when it is absent.
    """

    def __init__(self, weights: Optional[ScoreWeights] = None):
        self.weights = weights or ScoreWeights()

    def score_candidate(
        self,
        candidate: VerifiedOrganisation,
        spec: MatchSpec,
        context: Optional[DynamicRiskContext] = None
    ) -> ScoredRecommendation:
        ctx = context or DynamicRiskContext()
        org = candidate.candidate
        verification = candidate.verification

        required_caps = list(spec.required_capabilities)
        required_services = list(spec.service_types)
        org_caps = candidate.capabilities()
        best_worker = select_best_worker(candidate.workers)

        base_factors = [
            factor_calculations.proximity_factor(org.geo_distance_km, spec.max_distance_km),
            factor_calculations.capability_factor(
                org_caps, required_caps, org.service_types, required_services
            ),
            factor_calculations.availability_factor(verification.availability_confirmed),
            factor_calculations.verification_factor(org.verified, verification.org_pool_allowed),
        ]

        preference = factor_calculations.preference_alignment_factor(
            org_caps,
            ctx.functional_needs,
            "sensory_support" in ctx.functional_needs,
            ctx.continuity_worker,
            ctx.preference_weights,
        )
        reliability = factor_calculations.reliability_factor(org.reliability_score, ctx.outcome_history)
        urgency = factor_calculations.urgency_bonus_factor(
            spec.urgency or "standard",
            ctx.needs_urgency or "routine",
            verification.availability_confirmed,
        )
        emotional = factor_calculations.emotional_comfort_factor(
            ctx.emotional_state or "calm",
            best_worker.candidate.can_drive if best_worker else False,
            PBS_CAPABILITY in org_caps,
            ctx.previous_positive_experience,
        )

        score, breakdown = combine_score(
            base_factors, preference, reliability, urgency, emotional, self.weights
        )

        all_factors = base_factors + [preference, reliability, urgency, emotional]
        confidence = assign_confidence(verification, org.verified)

        logger.debug(f"Organisation {org.entity_id}: score={score:.1f}, confidence={confidence}")

        return ScoredRecommendation(
            organisation_id=org.entity_id,
            organisation_name=org.name,
            score=score,
            confidence=confidence,
            match_factors=all_factors,
            score_breakdown=breakdown,
            worker_id=best_worker.candidate.entity_id if best_worker else None,
            worker_name=best_worker.candidate.name if best_worker else None,
            vehicle_id=None,
            matched_service_types=intersect_ordered(required_services, org.service_types),
            matched_capabilities=intersect_ordered(required_caps, org_caps),
            distance_km=org.geo_distance_km,
            reasoning=build_reasoning(all_factors, confidence),
            unknowns=list(verification.unknowns),
            evidence_refs=[],
        )

    def score_candidates(
        self,
        candidates: List[VerifiedOrganisation],
        spec: MatchSpec,
        context: Optional[DynamicRiskContext] = None
    ) -> List[ScoredRecommendation]:
        """Score every candidate, preserving input order (ranking is separate)."""
        scored = [self.score_candidate(c, spec, context) for c in candidates]
        logger.info(f"Scored {len(scored)} candidates")
        return scored
