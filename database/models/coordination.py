import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Float, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from .base import Base


class CoordinationRequest(Base):
    """
    A participant's care and/or transport request awaiting matching.

    The stored row is reconstructed into a MatchSpec on every pipeline run.
    """
    __tablename__ = 'coordination_requests'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    participant_profile_id = Column(UUID(as_uuid=True), ForeignKey('participant_profiles.id'), nullable=False)

    request_type = Column(Text, nullable=False)  # care | transport | both
    service_type = Column(Text, nullable=True)
    urgency = Column(Text, nullable=False, default='standard')
    status = Column(Text, nullable=False, default='open')

    preferred_start = Column(TIMESTAMP(timezone=True), nullable=True)
    preferred_end = Column(TIMESTAMP(timezone=True), nullable=True)

    location_lat = Column(Float, nullable=True)
    location_lng = Column(Float, nullable=True)
    destination_lat = Column(Float, nullable=True)
    destination_lng = Column(Float, nullable=True)

    requirements = Column(JSONB, default={})
    notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    recommendations = relationship("Recommendation", back_populates="coordination_request", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_coordination_requests_participant', 'participant_profile_id'),
        Index('idx_coordination_requests_status', 'status'),
    )
