#!/usr/bin/env python3
"""
Hydrator - merge scored recommendations into display cards.

Pure: reads the verified candidates already held by the pipeline and a
precomputed evidence-count map. No database or search calls.
"""

from typing import Dict, List, Optional

from core.utils import canonical_id
from core.matcher.models import VerifiedOrganisation
from core.scorer.models import ScoredRecommendation
from core.recommender.models import (
    CardOrganisation,
    CardVerification,
    CardWorker,
    EvidenceCounts,
    RecommendationCard,
)

CONFIDENCE_COLORS = {
    "verified": "green",
    "likely": "amber",
    "needs_verification": "red",
}


def evidence_key(entity_type: str, entity_id: str) -> str:
    return f"{entity_type}:{canonical_id(entity_id)}"


def confidence_color(confidence: str) -> str:
    return CONFIDENCE_COLORS.get(confidence, "red")


def build_label(rec: ScoredRecommendation) -> str:
    if rec.worker_name:
        return f"{rec.organisation_name} – {rec.worker_name}"
    return rec.organisation_name


def _card_organisation(rec: ScoredRecommendation, verified: Optional[VerifiedOrganisation]) -> CardOrganisation:
    if verified is None:
        return CardOrganisation(id=rec.organisation_id, name=rec.organisation_name)

    org = verified.candidate
    return CardOrganisation(
        id=rec.organisation_id,
        name=org.name or rec.organisation_name,
        org_type=org.org_type,
        service_types=list(org.service_types),
        service_area_tokens=list(org.service_area_tokens),
        location={"lat": org.location[0], "lng": org.location[1]} if org.location else None,
        verified=org.verified,
        active=org.active,
        worker_count=org.worker_count,
        reliability_score=org.reliability_score,
        wav_available=org.wav_available,
        has_transfer_assist=org.has_transfer_assist,
        has_manual_handling=org.has_manual_handling,
        total_vehicles=org.total_vehicles,
        vehicle_types=list(org.vehicle_types),
    )


def _card_worker(rec: ScoredRecommendation, verified: Optional[VerifiedOrganisation]) -> Optional[CardWorker]:
    if not rec.worker_id or verified is None:
        return None
    for worker in verified.workers:
        doc = worker.candidate
        if doc.entity_id == rec.worker_id:
            return CardWorker(
                id=doc.entity_id,
                name=doc.name,
                worker_role=doc.worker_role,
                capabilities=list(doc.capabilities),
                can_drive=doc.can_drive,
                clearance_status=doc.clearance_status,
                clearance_current=doc.clearance_current,
            )
    return None


def hydrate_card(
    rec: ScoredRecommendation,
    verified_map: Dict[str, VerifiedOrganisation],
    evidence_counts: Dict[str, EvidenceCounts]
) -> RecommendationCard:
    verified = verified_map.get(rec.organisation_id)

    org_evidence = evidence_counts.get(evidence_key("organisation", rec.organisation_id)) or EvidenceCounts()
    worker_evidence = EvidenceCounts()
    if rec.worker_id:
        worker_evidence = evidence_counts.get(evidence_key("worker", rec.worker_id)) or EvidenceCounts()

    verification = CardVerification(
        availability_confirmed=verified.verification.availability_confirmed if verified else False,
        vehicle_available=verified.verification.vehicle_available if verified else None,
        clearance_current=verified.verification.clearance_current if verified else None,
        org_pool_allowed=verified.verification.org_pool_allowed if verified else True,
        unknowns=list(rec.unknowns),
        evidence_counts=EvidenceCounts(
            total=org_evidence.total + worker_evidence.total,
            verified=org_evidence.verified + worker_evidence.verified,
        ),
    )

    return RecommendationCard(
        organisation_id=rec.organisation_id,
        worker_id=rec.worker_id,
        vehicle_id=rec.vehicle_id,
        rank=rec.rank,
        score=rec.score,
        confidence=rec.confidence,
        match_factors=list(rec.match_factors),
        score_breakdown=rec.score_breakdown,
        matched_service_types=list(rec.matched_service_types),
        matched_capabilities=list(rec.matched_capabilities),
        distance_km=rec.distance_km,
        reasoning=rec.reasoning,
        unknowns=list(rec.unknowns),
        evidence_refs=list(rec.evidence_refs),
        organisation=_card_organisation(rec, verified),
        worker=_card_worker(rec, verified),
        verification=verification,
        label=build_label(rec),
        confidence_color=confidence_color(rec.confidence),
    )


def hydrate_cards(
    recs: List[ScoredRecommendation],
    verified_map: Dict[str, VerifiedOrganisation],
    evidence_counts: Dict[str, EvidenceCounts]
) -> List[RecommendationCard]:
    """Hydrate a bucket, preserving rank order."""
    return [hydrate_card(rec, verified_map, evidence_counts) for rec in recs]
