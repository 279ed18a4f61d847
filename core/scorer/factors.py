#!/usr/bin/env python3
"""
Match Factors - one normalized [0, 1] score per scoring dimension.

Base factors (averaged unweighted into base_match):
- proximity, capability_match, availability, verification_status

Context-sensitive factors (weighted against base_match):
- preference_alignment, reliability, urgency_bonus, emotional_comfort

Every calculator is pure and returns a MatchFactor with a human-readable
explanation. Scores are rounded half-up to one decimal.
"""

from typing import Dict, List, Optional, Sequence

from core.utils import clamp, round1
from core.scorer.models import MatchFactor, OutcomeHistory
from core.scorer.preferences import weight_for_need

STRESSED_STATES = frozenset({"anxious", "distressed", "stressed", "overwhelmed", "agitated"})
SENSORY_CAPABILITIES = frozenset({"sensory_support", "aac"})

NO_PREFERENCE_SCORE = 0.7
UNAVAILABLE_SCORE = 0.3


def proximity_factor(distance_km: Optional[float], max_distance_km: float) -> MatchFactor:
    if distance_km is None:
        return MatchFactor("proximity", 0.5, "Location not available")
    normalized = max(0.0, 1.0 - distance_km / max_distance_km) if max_distance_km > 0 else 0.0
    return MatchFactor("proximity", round1(normalized), f"{distance_km:.1f} km away")


def capability_factor(
    candidate_capabilities: Sequence[str],
    required_capabilities: Sequence[str],
    candidate_service_types: Sequence[str],
    required_service_types: Sequence[str]
) -> MatchFactor:
    if not required_capabilities and not required_service_types:
        return MatchFactor("capability_match", 1.0, "No specific capabilities required")

    missing = [c for c in required_capabilities if c not in candidate_capabilities]
    missing += [s for s in required_service_types if s not in candidate_service_types]
    total = len(required_capabilities) + len(required_service_types)
    score = (total - len(missing)) / total

    explanation = f"Missing: {', '.join(missing)}" if missing else "All capabilities matched"
    return MatchFactor("capability_match", round1(score), explanation)


def availability_factor(confirmed: bool) -> MatchFactor:
    if confirmed:
        return MatchFactor("availability", 1.0, "Availability confirmed")
    return MatchFactor("availability", UNAVAILABLE_SCORE, "Availability not confirmed")


def verification_factor(verified: bool, org_pool_allowed: bool) -> MatchFactor:
    if verified and org_pool_allowed:
        score = 1.0
    elif verified:
        score = 0.7
    else:
        score = 0.4

    if not org_pool_allowed:
        explanation = "Not in participant's provider pool"
    elif verified:
        explanation = "Organisation verified"
    else:
        explanation = "Organisation not yet verified"
    return MatchFactor("verification_status", score, explanation)


def reliability_factor(
    reliability_score: float,
    outcome_history: Optional[OutcomeHistory] = None
) -> MatchFactor:
    score = min(1.0, reliability_score / 100.0)
    explanation = f"Base reliability: {reliability_score:g}/100"

    if outcome_history and outcome_history.completed_bookings > 0:
        history_boost = outcome_history.positive_rate * 0.3
        score = min(1.0, score * 0.7 + history_boost + 0.15)
        explanation += (
            f" · {outcome_history.completed_bookings} bookings "
            f"({round(outcome_history.positive_rate * 100)}% positive)"
        )

    return MatchFactor("reliability", round1(max(0.0, score)), explanation)


def preference_alignment_factor(
    candidate_capabilities: Sequence[str],
    functional_needs: Sequence[str],
    sensory_support: bool,
    continuity_worker: bool,
    preference_weights: Optional[Dict[str, float]] = None
) -> MatchFactor:
    """Hit ratio over the participant's expressed preferences.

    Each sub-requirement (a functional need, sensory support, a continuity
    worker) adds its weight to the denominator and, when met, to the
    numerator. Without preference weights every sub-requirement weighs 1;
    with weights it weighs 1 + WEIGHT_SCALE * the weight of its preference
    dimension.
    """
    if not functional_needs and not sensory_support and not continuity_worker:
        return MatchFactor("preference_alignment", NO_PREFERENCE_SCORE, "No specific preferences expressed")

    hits = 0.0
    total = 0.0
    unmet: List[str] = []

    for need in functional_needs:
        weight = weight_for_need(need, preference_weights)
        total += weight
        if need in candidate_capabilities:
            hits += weight
        else:
            unmet.append(need)

    if sensory_support:
        weight = weight_for_need("sensory_support", preference_weights)
        total += weight
        if SENSORY_CAPABILITIES.intersection(candidate_capabilities):
            hits += weight
        else:
            unmet.append("sensory")

    if continuity_worker:
        # A continuity worker is always honoured by the booking step
        weight = weight_for_need("continuity", preference_weights)
        total += weight
        hits += weight

    score = hits / total if total > 0 else NO_PREFERENCE_SCORE
    explanation = f"{round(score * 100)}% of preferences matched"
    if continuity_worker:
        explanation += " (continuity worker)"
    if unmet:
        explanation += f"; unmet: {', '.join(unmet)}"
    return MatchFactor("preference_alignment", round1(score), explanation)


def urgency_bonus_factor(
    match_urgency: str,
    needs_urgency: str,
    availability_confirmed: bool
) -> MatchFactor:
    if match_urgency in ("urgent", "emergency") or needs_urgency in ("urgent", "soon"):
        if availability_confirmed:
            return MatchFactor("urgency_bonus", 1.0, "Urgent + available")
        return MatchFactor("urgency_bonus", UNAVAILABLE_SCORE, "Urgent but availability unconfirmed")

    if match_urgency == "standard":
        return MatchFactor("urgency_bonus", 0.8 if availability_confirmed else 0.5, "Standard urgency")

    return MatchFactor("urgency_bonus", 0.6, "Flexible timing")


def emotional_comfort_factor(
    emotional_state: str,
    worker_can_drive: bool,
    has_positive_behaviour_support: bool,
    previous_positive_experience: bool
) -> MatchFactor:
    parts: List[str] = []

    if emotional_state in STRESSED_STATES:
        score = 0.5
        if previous_positive_experience:
            score += 0.3
            parts.append("Previous positive experience")
        if has_positive_behaviour_support:
            score += 0.15
            parts.append("PBS capability")
        if worker_can_drive:
            score += 0.05
            parts.append("Can drive (fewer transitions)")
    else:
        score = 0.7
        parts.append("Participant calm")
        if previous_positive_experience:
            score += 0.2
            parts.append("Familiar provider")

    return MatchFactor(
        "emotional_comfort",
        round1(clamp(score)),
        "; ".join(parts) or "Default comfort"
    )
