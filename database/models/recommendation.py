import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Numeric, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from .base import Base


class Recommendation(Base):
    """
    One ranked recommendation for a coordination request.

    Rows for a request are replaced wholesale on every pipeline run.
    """
    __tablename__ = 'recommendations'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    coordination_request_id = Column(UUID(as_uuid=True), ForeignKey('coordination_requests.id', ondelete='CASCADE'), nullable=False)
    organisation_id = Column(UUID(as_uuid=True), ForeignKey('organisations.id'), nullable=False)
    worker_id = Column(UUID(as_uuid=True), ForeignKey('workers.id'), nullable=True)
    vehicle_id = Column(UUID(as_uuid=True), ForeignKey('vehicles.id'), nullable=True)

    bucket = Column(Text, nullable=False, default='care')  # combined | care | transport
    rank = Column(Integer, nullable=False, default=1)
    score = Column(Numeric(5, 2))
    confidence = Column(Text, nullable=False, default='needs_verification')
    reasoning = Column(Text, nullable=True)

    match_factors = Column(JSONB, default=[])
    score_breakdown = Column(JSONB, default={})
    matched_capabilities = Column(JSONB, default=[])
    matched_service_types = Column(JSONB, default=[])
    unknowns = Column(JSONB, default=[])

    status = Column(Text, nullable=False, default='pending')
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    coordination_request = relationship("CoordinationRequest", back_populates="recommendations")

    __table_args__ = (
        Index('idx_recommendations_request', 'coordination_request_id'),
        Index('idx_recommendations_score', 'score'),
    )
