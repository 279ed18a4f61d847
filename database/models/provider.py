import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Integer, Date, Index, UniqueConstraint
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from .base import Base


class Organisation(Base):
    __tablename__ = 'organisations'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    org_type = Column(Text, nullable=False)  # care | transport | both
    service_types = Column(JSONB, default=[])
    suburb = Column(Text, nullable=True)
    state = Column(Text, nullable=True)
    postcode = Column(Text, nullable=True)
    verified = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    workers = relationship("Worker", back_populates="organisation", cascade="all, delete-orphan")
    vehicles = relationship("Vehicle", back_populates="organisation", cascade="all, delete-orphan")


class Worker(Base):
    __tablename__ = 'workers'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organisation_id = Column(UUID(as_uuid=True), ForeignKey('organisations.id', ondelete='CASCADE'), nullable=False)
    full_name = Column(Text, nullable=False)
    worker_role = Column(Text, nullable=False, default='support_worker')
    capabilities = Column(JSONB, default=[])
    clearance_status = Column(Text, nullable=False, default='pending')  # pending | cleared | expired | revoked
    clearance_expiry = Column(Date, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=sql_text("timezone('UTC', now())"))

    organisation = relationship("Organisation", back_populates="workers")

    __table_args__ = (
        Index('idx_workers_organisation', 'organisation_id'),
    )


class Vehicle(Base):
    __tablename__ = 'vehicles'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organisation_id = Column(UUID(as_uuid=True), ForeignKey('organisations.id', ondelete='CASCADE'), nullable=False)
    registration = Column(Text, nullable=False)
    vehicle_type = Column(Text, nullable=False, default='sedan')
    wheelchair_accessible = Column(Boolean, nullable=False, default=False)
    capacity = Column(Integer, nullable=False, default=4)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    organisation = relationship("Organisation", back_populates="vehicles")

    __table_args__ = (
        UniqueConstraint('organisation_id', 'registration', name='uq_vehicles_org_registration'),
    )


class AvailabilitySlot(Base):
    """Window in which a worker or a vehicle can be booked."""
    __tablename__ = 'availability_slots'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    worker_id = Column(UUID(as_uuid=True), ForeignKey('workers.id', ondelete='CASCADE'), nullable=True)
    vehicle_id = Column(UUID(as_uuid=True), ForeignKey('vehicles.id', ondelete='CASCADE'), nullable=True)
    starts_at = Column(TIMESTAMP(timezone=True), nullable=False)
    ends_at = Column(TIMESTAMP(timezone=True), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        Index('idx_availability_worker', 'worker_id', 'starts_at'),
        Index('idx_availability_vehicle', 'vehicle_id', 'starts_at'),
    )


class ParticipantProviderPool(Base):
    """Restricted provider pool. A participant with no rows is unrestricted."""
    __tablename__ = 'participant_provider_pool'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    participant_profile_id = Column(UUID(as_uuid=True), ForeignKey('participant_profiles.id', ondelete='CASCADE'), nullable=False)
    organisation_id = Column(UUID(as_uuid=True), ForeignKey('organisations.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    __table_args__ = (
        UniqueConstraint('participant_profile_id', 'organisation_id', name='uq_provider_pool_participant_org'),
    )
