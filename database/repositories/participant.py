import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from core.matcher.interfaces import DynamicContextProvider
from core.scorer.models import DynamicRiskContext, OutcomeHistory
from core.scorer.preferences import (
    ServiceOutcome as OutcomeSignal,
    outcome_sentiment,
    parse_weights,
    update_weights_from_outcome,
)
from database.database import SessionFactory, db_session_scope
from database.models import NeedsProfile, ParticipantPreferences, ServiceOutcome
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class ParticipantRepository(BaseRepository):
    def get_latest_needs_profile(self, participant_id: Any) -> Optional[NeedsProfile]:
        stmt = (
            select(NeedsProfile)
            .where(NeedsProfile.participant_id == to_uuid(participant_id))
            .order_by(NeedsProfile.recorded_at.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_preferences(self, participant_id: Any) -> Optional[ParticipantPreferences]:
        stmt = select(ParticipantPreferences).where(
            ParticipantPreferences.participant_profile_id == to_uuid(participant_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_outcomes(self, participant_id: Any) -> List[ServiceOutcome]:
        stmt = (
            select(ServiceOutcome)
            .where(ServiceOutcome.participant_profile_id == to_uuid(participant_id))
            .order_by(ServiceOutcome.created_at.desc())
        )
        return self.db.execute(stmt).scalars().all()

    def record_outcome(
        self,
        booking_id: Any,
        participant_id: Any,
        organisation_id: Any,
        worker_id: Optional[Any],
        outcome: OutcomeSignal
    ) -> ServiceOutcome:
        row = ServiceOutcome(
            booking_id=to_uuid(booking_id),
            participant_profile_id=to_uuid(participant_id),
            organisation_id=to_uuid(organisation_id),
            worker_id=to_uuid(worker_id),
            comfort_rating=outcome.comfort_rating,
            accessibility_met=outcome.accessibility_met,
            continuity_preference=outcome.continuity_preference,
            emotional_aftercare_needed=outcome.emotional_aftercare_needed,
            safety_concerns=outcome.safety_concerns,
            additional_needs_noted=list(outcome.additional_needs_noted),
            would_use_again=outcome.would_use_again,
            sentiment=outcome_sentiment(outcome.comfort_rating),
        )
        self.db.add(row)
        self.db.flush()
        logger.info(f"Recorded {row.sentiment} outcome for booking {booking_id}")
        return row

    def apply_outcome_to_weights(self, participant_id: Any, outcome: OutcomeSignal) -> Dict[str, float]:
        """Fold one service outcome into the stored preference weights."""
        prefs = self.get_preferences(participant_id)
        if prefs is None:
            prefs = ParticipantPreferences(participant_profile_id=to_uuid(participant_id), service_preferences={})
            self.db.add(prefs)

        current = dict(prefs.service_preferences or {})
        weights, _ = update_weights_from_outcome(current, outcome)
        current['weights'] = weights
        # Reassign so the JSONB column is flagged dirty
        prefs.service_preferences = current
        self.db.flush()
        return weights


def build_outcome_history(outcomes: List[ServiceOutcome]) -> Optional[OutcomeHistory]:
    if not outcomes:
        return None
    positive = sum(1 for o in outcomes if o.sentiment == 'positive')
    return OutcomeHistory(completed_bookings=len(outcomes), positive_rate=positive / len(outcomes))


def build_dynamic_context(
    needs: Optional[NeedsProfile],
    preferences: Optional[ParticipantPreferences],
    outcomes: List[ServiceOutcome]
) -> Optional[DynamicRiskContext]:
    """Assemble the scoring context from stored participant signals.

    None when nothing is stored, so the scorer falls back to its defaults.
    """
    service_preferences = preferences.service_preferences if preferences else None
    has_weights = bool(service_preferences and service_preferences.get('weights'))

    if needs is None and not outcomes and not has_weights:
        return None

    latest = outcomes[0] if outcomes else None
    return DynamicRiskContext(
        emotional_state=needs.emotional_state if needs else "calm",
        needs_urgency=needs.urgency_level if needs else "routine",
        functional_needs=list(needs.functional_needs or []) if needs else [],
        continuity_worker=bool(latest and latest.continuity_preference == 'same_worker'),
        previous_positive_experience=any(
            o.sentiment == 'positive' and o.would_use_again for o in outcomes
        ),
        outcome_history=build_outcome_history(outcomes),
        preference_weights=parse_weights(service_preferences) if has_weights else None,
    )


class SqlDynamicContextProvider(DynamicContextProvider):
    """Reads the latest needs profile, stored weights and outcome history."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_context(self, participant_profile_id: str) -> Optional[DynamicRiskContext]:
        with db_session_scope(self.session_factory) as session:
            repo = ParticipantRepository(session)
            return build_dynamic_context(
                repo.get_latest_needs_profile(participant_profile_id),
                repo.get_preferences(participant_profile_id),
                repo.get_outcomes(participant_profile_id),
            )
