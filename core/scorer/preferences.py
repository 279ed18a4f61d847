#!/usr/bin/env python3
"""
Preference Weights - learn per-dimension weights from service outcomes.

Weights live in the participant's service_preferences JSONB under "weights"
and are read by the scorer on the next match run.

Weight range: 0.0 (don't care) to 1.0 (critical requirement).
Adjustments are additive and clamped to [0, 1]. A mismatch on a dimension
raises its weight for future matching.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging

from core.utils import clamp

logger = logging.getLogger(__name__)

PREFERENCE_WEIGHT_KEYS: Tuple[str, ...] = (
    "accessibility",
    "sensory_quality",
    "communication_support",
    "continuity",
    "emotional_comfort",
    "punctuality",
    "safety",
)

DEFAULT_WEIGHTS: Dict[str, float] = {
    "accessibility": 0.5,
    "sensory_quality": 0.3,
    "communication_support": 0.3,
    "continuity": 0.3,
    "emotional_comfort": 0.3,
    "punctuality": 0.4,
    "safety": 0.5,
}

# Functional need / capability -> preference dimension
NEED_DIMENSIONS: Dict[str, str] = {
    "wheelchair": "accessibility",
    "wheelchair_transfer": "accessibility",
    "manual_handling": "accessibility",
    "sensory_support": "sensory_quality",
    "hearing_support": "sensory_quality",
    "vision_support": "sensory_quality",
    "aac": "communication_support",
    "communication_support": "communication_support",
    "positive_behaviour_support": "safety",
    "medication_administration": "safety",
    "continuity": "continuity",
}

SENSORY_NEEDS = ("sensory_support", "hearing_support", "vision_support")
COMMUNICATION_NEEDS = ("aac", "communication_support")
CONTINUITY_PREFERENCES = ("same_worker", "same_org", "no_preference", "different_worker")

# A weight of 1.0 makes a need count five times an unweighted one
WEIGHT_SCALE = 4.0


@dataclass
class ServiceOutcome:
    """Post-service feedback captured for one booking."""
    comfort_rating: int
    accessibility_met: bool
    continuity_preference: str = "no_preference"
    emotional_aftercare_needed: bool = False
    safety_concerns: Optional[str] = None
    additional_needs_noted: List[str] = field(default_factory=list)
    would_use_again: bool = True


@dataclass(frozen=True)
class WeightAdjustment:
    key: str
    delta: float
    reason: str


def outcome_sentiment(comfort_rating: int) -> str:
    if comfort_rating <= 2:
        return "negative"
    if comfort_rating <= 3:
        return "neutral"
    return "positive"


def weight_for_need(need: str, preference_weights: Optional[Dict[str, float]]) -> float:
    """Contribution of one preference sub-requirement to the alignment ratio.

    One unit without weights; 1 + WEIGHT_SCALE * the dimension weight when
    weights are set.
    Needs with no mapped dimension always count one unit.
    """
    if not preference_weights:
        return 1.0
    dimension = NEED_DIMENSIONS.get(need)
    if dimension is None:
        return 1.0
    return 1.0 + WEIGHT_SCALE * clamp(float(preference_weights.get(dimension, DEFAULT_WEIGHTS[dimension])))


def compute_weight_adjustments(outcome: ServiceOutcome) -> List[WeightAdjustment]:
    """
    Compute preference weight adjustments from a service outcome.

    Rules:
    - Accessibility not met: accessibility +0.15
    - Sensory needs noted: sensory_quality +0.10
    - Communication needs noted: communication_support +0.10
    - same_worker / same_org: continuity +0.10; different_worker: continuity -0.10
    - Emotional aftercare needed: emotional_comfort +0.10
    - Safety concerns reported: safety +0.15
    - Comfortable, accessible and would use again: accessibility -0.03
    """
    adjustments: List[WeightAdjustment] = []
    noted = outcome.additional_needs_noted or []

    if not outcome.accessibility_met:
        adjustments.append(WeightAdjustment("accessibility", 0.15, "Accessibility needs were not met"))

    sensory = [n for n in noted if n in SENSORY_NEEDS]
    if sensory:
        adjustments.append(WeightAdjustment(
            "sensory_quality", 0.10, f"Sensory needs noted: {', '.join(sensory)}"
        ))

    communication = [n for n in noted if n in COMMUNICATION_NEEDS]
    if communication:
        adjustments.append(WeightAdjustment(
            "communication_support", 0.10,
            f"Communication support needs noted: {', '.join(communication)}"
        ))

    if outcome.continuity_preference in ("same_worker", "same_org"):
        adjustments.append(WeightAdjustment(
            "continuity", 0.10,
            f"Participant prefers {outcome.continuity_preference.replace('_', ' ')}"
        ))
    elif outcome.continuity_preference == "different_worker":
        adjustments.append(WeightAdjustment(
            "continuity", -0.10, "Participant requested a different worker"
        ))

    if outcome.emotional_aftercare_needed:
        adjustments.append(WeightAdjustment("emotional_comfort", 0.10, "Emotional aftercare was needed"))

    if outcome.safety_concerns:
        adjustments.append(WeightAdjustment("safety", 0.15, "Safety concerns were reported"))

    if outcome.comfort_rating >= 4 and outcome.accessibility_met and outcome.would_use_again:
        adjustments.append(WeightAdjustment(
            "accessibility", -0.03, "Positive outcome: accessibility weight decays toward baseline"
        ))

    return adjustments


def apply_weight_adjustments(
    current: Dict[str, float],
    adjustments: List[WeightAdjustment]
) -> Dict[str, float]:
    updated = dict(current)
    for adj in adjustments:
        base = updated.get(adj.key, DEFAULT_WEIGHTS.get(adj.key, 0.0))
        updated[adj.key] = clamp(base + adj.delta)
    return updated


def parse_weights(service_preferences: Optional[Dict[str, Any]]) -> Dict[str, float]:
    """Read weights from service_preferences JSONB, defaulting missing keys."""
    raw = (service_preferences or {}).get("weights") or {}
    result = dict(DEFAULT_WEIGHTS)
    for key in PREFERENCE_WEIGHT_KEYS:
        value = raw.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            result[key] = clamp(float(value))
        elif value is not None:
            logger.warning(f"Ignoring non-numeric preference weight {key}={value!r}")
    return result


def update_weights_from_outcome(
    service_preferences: Optional[Dict[str, Any]],
    outcome: ServiceOutcome
) -> Tuple[Dict[str, float], List[WeightAdjustment]]:
    """Parse the stored weights, apply the outcome's adjustments, return both."""
    adjustments = compute_weight_adjustments(outcome)
    updated = apply_weight_adjustments(parse_weights(service_preferences), adjustments)
    if adjustments:
        logger.info(
            "Preference weights adjusted: " +
            ", ".join(f"{a.key}{a.delta:+.2f}" for a in adjustments)
        )
    return updated, adjustments
