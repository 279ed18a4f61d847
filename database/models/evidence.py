import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Boolean, Index
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class EvidenceRef(Base):
    """Supporting evidence attached to an organisation or a worker."""
    __tablename__ = 'evidence_refs'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    entity_type = Column(Text, nullable=False)  # organisation | worker
    entity_id = Column(UUID(as_uuid=True), nullable=False)
    category = Column(Text, nullable=False, default='other')
    title = Column(Text, nullable=False)
    url = Column(Text, nullable=True)
    snippet = Column(Text, nullable=True)
    source = Column(Text, nullable=False, default='coordinator_manual')
    verified = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        Index('idx_evidence_refs_entity', 'entity_type', 'entity_id'),
    )
