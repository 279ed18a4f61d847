#!/usr/bin/env python3
"""
Verification Service - hard-constraint checks against the authoritative store.

After the candidate source returns organisations and workers, confirm:
1. Workers have availability covering the preferred time window
2. A wheelchair-accessible vehicle is available when one is required
3. Workers hold a current clearance
4. The organisation is in the participant's provider pool (if restricted)

A fact the store cannot determine (``None``) becomes a named unknown on the
candidate and downgrades its confidence. An exception from the store is a
collaborator failure and propagates to the caller.

All fact checks for all candidates are submitted to a single thread pool
and joined before any result is assembled.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Optional
import logging

from core.matcher.interfaces import AuthoritativeStore
from core.matcher.models import (
    MatchSpec,
    OrganisationCandidate,
    VerificationResult,
    VerifiedOrganisation,
    VerifiedWorker,
    WorkerCandidate,
)

logger = logging.getLogger(__name__)

UNKNOWN_WAV_AVAILABILITY = "wav_availability_unknown"
UNKNOWN_POOL_MEMBERSHIP = "org_not_in_participant_pool"
UNKNOWN_TIME_WINDOW = "preferred_time_window_not_specified"
UNKNOWN_WORKER_AVAILABILITY = "worker_availability_unknown"
UNKNOWN_CLEARANCE_NOT_CURRENT = "worker_clearance_not_current"
UNKNOWN_CLEARANCE = "worker_clearance_unknown"
UNKNOWN_NO_WORKER_AVAILABLE = "no_worker_availability_confirmed"

DEFAULT_MAX_WORKERS = 16


def _resolve(future: Optional[Future]) -> Optional[bool]:
    return future.result() if future is not None else None


def aggregate_clearance(workers: List[VerifiedWorker]) -> Optional[bool]:
    """Organisation-level clearance from its workers.

    None without workers, True if any worker is cleared, False only when
    every worker is explicitly not cleared.
    """
    if not workers:
        return None
    values = [w.verification.clearance_current for w in workers]
    if any(v is True for v in values):
        return True
    if all(v is False for v in values):
        return False
    return None


class VerificationService:
    """
    Verifies organisation candidates and their workers concurrently.

    Request-scoped: each verify_all call owns its own executor and shares
    no state with other calls.
    """

    def __init__(self, store: AuthoritativeStore, max_workers: int = DEFAULT_MAX_WORKERS):
        self.store = store
        self.max_workers = max_workers

    def verify_all(
        self,
        organisations: List[OrganisationCandidate],
        workers: List[WorkerCandidate],
        spec: MatchSpec
    ) -> List[VerifiedOrganisation]:
        if not organisations:
            return []

        workers_by_org: Dict[str, List[WorkerCandidate]] = {}
        for worker in workers:
            workers_by_org.setdefault(worker.organisation_id, []).append(worker)

        requires_wav = spec.requires_wheelchair_access
        start, end = spec.preferred_start, spec.preferred_end
        has_window = start is not None and end is not None

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            org_futures = []
            for org in organisations:
                vehicle_future = None
                if requires_wav:
                    vehicle_future = executor.submit(
                        self.store.vehicle_available, org.entity_id, True, start, end
                    )
                pool_future = executor.submit(
                    self.store.organisation_in_pool, org.entity_id, spec.participant_profile_id
                )

                worker_futures = []
                for worker in workers_by_org.get(org.entity_id, []):
                    availability_future = None
                    if has_window:
                        availability_future = executor.submit(
                            self.store.worker_available, worker.entity_id, start, end
                        )
                    clearance_future = executor.submit(
                        self.store.worker_clearance_current, worker.entity_id
                    )
                    worker_futures.append((worker, availability_future, clearance_future))

                org_futures.append((org, vehicle_future, pool_future, worker_futures))

            results = [
                self._assemble(org, vehicle_future, pool_future, worker_futures, requires_wav, has_window)
                for org, vehicle_future, pool_future, worker_futures in org_futures
            ]

        logger.info(
            f"Verified {len(results)} organisations "
            f"({sum(len(r.workers) for r in results)} workers)"
        )
        return results

    def _assemble(
        self,
        org: OrganisationCandidate,
        vehicle_future: Optional[Future],
        pool_future: Future,
        worker_futures: list,
        requires_wav: bool,
        has_window: bool
    ) -> VerifiedOrganisation:
        unknowns: List[str] = []

        vehicle_available = _resolve(vehicle_future)
        if requires_wav and vehicle_available is None:
            unknowns.append(UNKNOWN_WAV_AVAILABILITY)

        in_pool = pool_future.result()
        # None: participant has no restricted pool
        org_pool_allowed = in_pool is not False
        if not org_pool_allowed:
            unknowns.append(UNKNOWN_POOL_MEMBERSHIP)

        verified_workers = [
            self._assemble_worker(worker, availability_future, clearance_future, has_window)
            for worker, availability_future, clearance_future in worker_futures
        ]

        any_available = any(w.verification.availability_confirmed for w in verified_workers)
        if verified_workers and not any_available:
            unknowns.append(UNKNOWN_NO_WORKER_AVAILABLE)

        verification = VerificationResult(
            availability_confirmed=any_available,
            vehicle_available=vehicle_available,
            clearance_current=aggregate_clearance(verified_workers),
            org_pool_allowed=org_pool_allowed,
            unknowns=unknowns,
        )
        if unknowns:
            logger.debug(f"Organisation {org.entity_id} unknowns: {unknowns}")
        return VerifiedOrganisation(candidate=org, verification=verification, workers=verified_workers)

    @staticmethod
    def _assemble_worker(
        worker: WorkerCandidate,
        availability_future: Optional[Future],
        clearance_future: Future,
        has_window: bool
    ) -> VerifiedWorker:
        unknowns: List[str] = []

        if not has_window:
            available = False
            unknowns.append(UNKNOWN_TIME_WINDOW)
        else:
            answer = _resolve(availability_future)
            available = bool(answer)
            if answer is None:
                unknowns.append(UNKNOWN_WORKER_AVAILABILITY)

        clearance = clearance_future.result()
        if clearance is False:
            unknowns.append(UNKNOWN_CLEARANCE_NOT_CURRENT)
        elif clearance is None:
            unknowns.append(UNKNOWN_CLEARANCE)

        return VerifiedWorker(
            candidate=worker,
            verification=VerificationResult(
                availability_confirmed=available,
                vehicle_available=None,
                clearance_current=clearance,
                org_pool_allowed=True,
                unknowns=unknowns,
            ),
        )
