import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, func

from core.matcher.interfaces import AuthoritativeStore
from database.database import SessionFactory, db_session_scope
from database.models import AvailabilitySlot, ParticipantProviderPool, Vehicle, Worker
from database.repositories.base import to_uuid

logger = logging.getLogger(__name__)


class SqlAuthoritativeStore(AuthoritativeStore):
    """
    Hard-constraint lookups against PostgreSQL.

    Each query opens its own session, so the verifier can fan checks out
    across threads without sharing a Session.
    """

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def worker_available(self, worker_id: str, start: datetime, end: datetime) -> Optional[bool]:
        worker_uuid = to_uuid(worker_id)
        if worker_uuid is None:
            return None

        with db_session_scope(self.session_factory) as session:
            has_slots = session.execute(
                select(func.count(AvailabilitySlot.id)).where(AvailabilitySlot.worker_id == worker_uuid)
            ).scalar_one()
            if not has_slots:
                # No calendar recorded for this worker
                return None

            covering = session.execute(
                select(AvailabilitySlot.id).where(
                    AvailabilitySlot.worker_id == worker_uuid,
                    AvailabilitySlot.is_available == True,
                    AvailabilitySlot.starts_at <= start,
                    AvailabilitySlot.ends_at >= end,
                ).limit(1)
            ).first()
            return covering is not None

    def vehicle_available(
        self,
        organisation_id: str,
        requires_wav: bool,
        start: Optional[datetime],
        end: Optional[datetime]
    ) -> Optional[bool]:
        if not requires_wav:
            return None
        org_uuid = to_uuid(organisation_id)
        if org_uuid is None:
            return None

        with db_session_scope(self.session_factory) as session:
            wav_ids = session.execute(
                select(Vehicle.id).where(
                    Vehicle.organisation_id == org_uuid,
                    Vehicle.wheelchair_accessible == True,
                    Vehicle.active == True,
                )
            ).scalars().all()
            if not wav_ids:
                return False
            if start is None or end is None:
                # A WAV exists but the window is open
                return None

            covering = session.execute(
                select(AvailabilitySlot.id).where(
                    AvailabilitySlot.vehicle_id.in_(wav_ids),
                    AvailabilitySlot.is_available == True,
                    AvailabilitySlot.starts_at <= start,
                    AvailabilitySlot.ends_at >= end,
                ).limit(1)
            ).first()
            return covering is not None

    def worker_clearance_current(self, worker_id: str) -> Optional[bool]:
        worker_uuid = to_uuid(worker_id)
        if worker_uuid is None:
            return None

        with db_session_scope(self.session_factory) as session:
            worker = session.execute(
                select(Worker).where(Worker.id == worker_uuid)
            ).scalar_one_or_none()
            if worker is None:
                return None
            if worker.clearance_status != 'cleared':
                return False
            if worker.clearance_expiry is None:
                return True
            return worker.clearance_expiry > datetime.now(timezone.utc).date()

    def organisation_in_pool(self, organisation_id: str, participant_profile_id: str) -> Optional[bool]:
        participant_uuid = to_uuid(participant_profile_id)
        org_uuid = to_uuid(organisation_id)
        if participant_uuid is None or org_uuid is None:
            return None

        with db_session_scope(self.session_factory) as session:
            pool = session.execute(
                select(ParticipantProviderPool.organisation_id).where(
                    ParticipantProviderPool.participant_profile_id == participant_uuid
                )
            ).scalars().all()
            if not pool:
                return None
            return org_uuid in set(pool)
