"""Recommendation pipeline runner module.

Orchestrates one matching run for a coordination request:
load request -> search -> verify -> score -> rank -> group -> persist ->
hydrate. Used by both main.py and the web application.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.matcher.interfaces import AuthoritativeStore, CandidateSource, DynamicContextProvider
from core.matcher.models import (
    Coordinates,
    DEFAULT_MAX_DISTANCE_KM,
    MatchRequirements,
    MatchSpec,
    OrganisationCandidate,
    TERMINAL_STATUSES,
    VerifiedOrganisation,
    WorkerCandidate,
)
from core.matcher.verifier import DEFAULT_MAX_WORKERS, VerificationService
from core.scorer.models import ScoreWeights
from core.scorer.persistence import save_recommendations
from core.scorer.ranking import rank_recommendations
from core.scorer.service import ScoringService
from core.recommender.grouping import group_recommendations
from core.recommender.hydrator import hydrate_cards
from core.recommender.models import (
    GroupedRecommendations,
    RecommendationMeta,
    SplitRecommendations,
)
from pipeline.errors import PipelineError

logger = logging.getLogger(__name__)

TOP_N = 20

UowFactory = Callable[[], AbstractContextManager]


def _coordinates(lat: Optional[float], lng: Optional[float]) -> Optional[Coordinates]:
    if lat is None or lng is None:
        return None
    return Coordinates(lat=float(lat), lng=float(lng))


def build_requirements(raw: Optional[Dict[str, Any]]) -> Optional[MatchRequirements]:
    """MatchRequirements from the stored requirements JSON, None when empty."""
    if not raw:
        return None
    return MatchRequirements(
        wheelchair_accessible=bool(raw.get('wheelchair_accessible', False)),
        required_capabilities=tuple(raw.get('required_capabilities') or ()),
        gender_preference=raw.get('gender_preference'),
        language_preference=raw.get('language_preference'),
        special_qualifications=tuple(raw.get('special_qualifications') or ()),
        verified_organisations_only=bool(raw.get('verified_organisations_only', False)),
    )


def build_match_spec(row, default_max_distance_km: float = DEFAULT_MAX_DISTANCE_KM) -> MatchSpec:
    """Reconstruct the MatchSpec from a stored coordination request row."""
    return MatchSpec(
        participant_profile_id=str(row.participant_profile_id),
        request_type=row.request_type,
        service_types=(row.service_type,) if row.service_type else (),
        urgency=row.urgency or "standard",
        location=_coordinates(row.location_lat, row.location_lng),
        destination=_coordinates(row.destination_lat, row.destination_lng),
        max_distance_km=default_max_distance_km,
        preferred_start=row.preferred_start,
        preferred_end=row.preferred_end,
        requirements=build_requirements(row.requirements),
        notes=row.notes,
    )


class RecommendationPipeline:
    """
    Runs the recommendation pipeline against injected collaborators.

    Stateless between runs: every run owns its executors and unit-of-work
    scopes, so one instance may serve concurrent requests.
    """

    def __init__(
        self,
        uow_factory: UowFactory,
        candidate_source: CandidateSource,
        store: AuthoritativeStore,
        context_provider: Optional[DynamicContextProvider] = None,
        weights: Optional[ScoreWeights] = None,
        top_n: int = TOP_N,
        default_max_distance_km: float = DEFAULT_MAX_DISTANCE_KM,
        verification_workers: int = DEFAULT_MAX_WORKERS
    ):
        self.uow_factory = uow_factory
        self.candidate_source = candidate_source
        self.context_provider = context_provider
        self.verifier = VerificationService(store, max_workers=verification_workers)
        self.scorer = ScoringService(weights)
        self.top_n = top_n
        self.default_max_distance_km = default_max_distance_km

    def load_spec(self, request_id: str) -> MatchSpec:
        with self.uow_factory() as repo:
            row = repo.requests.get_by_id(request_id)
            if row is None:
                raise PipelineError("NOT_FOUND", f"Coordination request {request_id} not found")
            if row.status in TERMINAL_STATUSES:
                raise PipelineError("INVALID_STATUS", f"Request {request_id} is {row.status}")
            return build_match_spec(row, self.default_max_distance_km)

    def search(self, spec: MatchSpec) -> Tuple[List[OrganisationCandidate], List[WorkerCandidate]]:
        try:
            with ThreadPoolExecutor(max_workers=2) as executor:
                org_future = executor.submit(self.candidate_source.search_organisations, spec)
                worker_future = executor.submit(self.candidate_source.search_workers, spec)
                return org_future.result(), worker_future.result()
        except Exception as e:
            raise PipelineError("SEARCH_FAILED", f"Candidate search failed: {e}") from e

    def verify(
        self,
        organisations: List[OrganisationCandidate],
        workers: List[WorkerCandidate],
        spec: MatchSpec
    ) -> List[VerifiedOrganisation]:
        try:
            return self.verifier.verify_all(organisations[:self.top_n], workers, spec)
        except Exception as e:
            raise PipelineError("VERIFY_FAILED", f"Verification failed: {e}") from e

    def run(self, request_id: str) -> GroupedRecommendations:
        pipeline_start = time.time()

        logger.info("=" * 60)
        logger.info(f"STARTING RECOMMENDATION PIPELINE: request {request_id}")
        logger.info("=" * 60)

        step_start = time.time()
        spec = self.load_spec(request_id)
        logger.info(
            f"Step 1: Loaded request ({spec.request_type}, urgency={spec.urgency}) "
            f"in {time.time() - step_start:.2f}s"
        )

        step_start = time.time()
        organisations, workers = self.search(spec)
        total_searched = len(organisations) + len(workers)
        logger.info(
            f"Step 2: Found {len(organisations)} organisations and {len(workers)} workers "
            f"in {time.time() - step_start:.2f}s"
        )

        step_start = time.time()
        verified = self.verify(organisations, workers, spec)
        eligible = [v for v in verified if v.verification.org_pool_allowed]
        logger.info(
            f"Step 3: Verified {len(verified)} organisations, {len(eligible)} eligible "
            f"in {time.time() - step_start:.2f}s"
        )

        step_start = time.time()
        context = None
        if self.context_provider is not None:
            context = self.context_provider.get_context(spec.participant_profile_id)
        scored = self.scorer.score_candidates(eligible, spec, context)
        ranked = rank_recommendations(scored)
        verified_map: Dict[str, VerifiedOrganisation] = {v.entity_id: v for v in verified}
        groups = group_recommendations(spec.request_type, ranked, verified_map)
        logger.info(
            f"Step 4: Scored and grouped {len(ranked)} recommendations "
            f"(context={'yes' if context else 'default'}) in {time.time() - step_start:.2f}s"
        )

        step_start = time.time()
        all_recs = groups.all()
        entities = [("organisation", r.organisation_id) for r in all_recs]
        entities += [("worker", r.worker_id) for r in all_recs if r.worker_id]
        with self.uow_factory() as repo:
            save_recommendations(request_id, groups, repo)
            evidence_counts = repo.evidence.count_for_entities(entities)
        logger.info(f"Step 5: Persisted {len(all_recs)} recommendations in {time.time() - step_start:.2f}s")

        result = GroupedRecommendations(
            request_id=str(request_id),
            request_type=spec.request_type,
            combined=hydrate_cards(groups.combined, verified_map, evidence_counts),
            split=SplitRecommendations(
                care=hydrate_cards(groups.care, verified_map, evidence_counts),
                transport=hydrate_cards(groups.transport, verified_map, evidence_counts),
            ),
            meta=RecommendationMeta(
                total_candidates_searched=total_searched,
                total_verified=len(eligible),
                total_returned=len(all_recs),
                generated_at=datetime.now(timezone.utc).isoformat(),
            ),
        )

        logger.info("=" * 60)
        logger.info(f"RECOMMENDATION PIPELINE COMPLETE in {time.time() - pipeline_start:.2f}s")
        logger.info("=" * 60)
        return result


def build_pipeline(ctx) -> RecommendationPipeline:
    """Wire a RecommendationPipeline from an AppContext."""
    matching = ctx.config.matching
    return RecommendationPipeline(
        uow_factory=ctx.uow,
        candidate_source=ctx.candidate_source,
        store=ctx.store,
        context_provider=ctx.context_provider,
        weights=matching.scorer.weights(),
        top_n=matching.top_n,
        default_max_distance_km=matching.default_max_distance_km,
        verification_workers=matching.verification_workers,
    )


def run_pipeline(ctx, request_id: str) -> GroupedRecommendations:
    return build_pipeline(ctx).run(request_id)
