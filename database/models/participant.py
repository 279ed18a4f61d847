import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, JSONB

from .base import Base


class ParticipantProfile(Base):
    __tablename__ = 'participant_profiles'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    display_name = Column(Text, nullable=True)
    risk_tier = Column(Text, nullable=False, default='standard')
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))


class ParticipantPreferences(Base):
    """service_preferences["weights"] holds the learned preference weights."""
    __tablename__ = 'participant_preferences'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    participant_profile_id = Column(UUID(as_uuid=True), ForeignKey('participant_profiles.id', ondelete='CASCADE'), nullable=False, unique=True)
    service_preferences = Column(JSONB, default={})
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))


class NeedsProfile(Base):
    """Point-in-time snapshot of a participant's dynamic needs."""
    __tablename__ = 'needs_profiles'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    participant_id = Column(UUID(as_uuid=True), ForeignKey('participant_profiles.id', ondelete='CASCADE'), nullable=False)
    recorded_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    functional_needs = Column(JSONB, default=[])
    emotional_state = Column(Text, nullable=False, default='calm')
    urgency_level = Column(Text, nullable=False, default='routine')
    notes = Column(Text, nullable=True)

    __table_args__ = (
        Index('idx_needs_profiles_participant_time', 'participant_id', 'recorded_at'),
    )


class ServiceOutcome(Base):
    """Structured outcome of a completed booking."""
    __tablename__ = 'service_outcomes'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    booking_id = Column(UUID(as_uuid=True), nullable=True)
    participant_profile_id = Column(UUID(as_uuid=True), nullable=False)
    organisation_id = Column(UUID(as_uuid=True), nullable=False)
    worker_id = Column(UUID(as_uuid=True), nullable=True)
    comfort_rating = Column(Integer, nullable=False)
    accessibility_met = Column(Boolean, nullable=False)
    continuity_preference = Column(Text, nullable=False, default='no_preference')
    emotional_aftercare_needed = Column(Boolean, nullable=False, default=False)
    safety_concerns = Column(Text, nullable=True)
    additional_needs_noted = Column(JSONB, default=[])
    would_use_again = Column(Boolean, nullable=False, default=True)
    sentiment = Column(Text, nullable=False, default='positive')  # positive | neutral | negative
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        Index('idx_outcomes_participant', 'participant_profile_id'),
    )
