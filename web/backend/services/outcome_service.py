#!/usr/bin/env python3
"""
Outcome service - record post-service feedback and learn preference weights.
"""

import logging
from dataclasses import asdict

from core.app_context import AppContext
from core.scorer.preferences import ServiceOutcome, compute_weight_adjustments
from ..models.requests import OutcomeRequest
from ..models.responses import OutcomeResponse

logger = logging.getLogger(__name__)


def to_service_outcome(request: OutcomeRequest) -> ServiceOutcome:
    return ServiceOutcome(
        comfort_rating=request.comfort_rating,
        accessibility_met=request.accessibility_met,
        continuity_preference=request.continuity_preference,
        emotional_aftercare_needed=request.emotional_aftercare_needed,
        safety_concerns=request.safety_concerns,
        additional_needs_noted=list(request.additional_needs_noted),
        would_use_again=request.would_use_again,
    )


class OutcomeService:
    """Persists booking outcomes and folds them into stored weights."""

    def __init__(self, ctx: AppContext):
        self.ctx = ctx

    def record(self, booking_id: str, request: OutcomeRequest) -> OutcomeResponse:
        outcome = to_service_outcome(request)

        with self.ctx.uow() as repo:
            row = repo.participants.record_outcome(
                booking_id,
                request.participant_profile_id,
                request.organisation_id,
                request.worker_id,
                outcome,
            )
            weights = repo.participants.apply_outcome_to_weights(request.participant_profile_id, outcome)
            outcome_id = str(row.id)
            sentiment = row.sentiment

        adjustments = compute_weight_adjustments(outcome)
        logger.info(
            f"Outcome {outcome_id} for booking {booking_id}: {sentiment}, "
            f"{len(adjustments)} weight adjustments"
        )
        return OutcomeResponse(
            outcome_id=outcome_id,
            booking_id=str(booking_id),
            sentiment=sentiment,
            weight_adjustments=[asdict(a) for a in adjustments],
            preference_weights=weights,
        )
