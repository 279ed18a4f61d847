#!/usr/bin/env python3
"""
Grouping - split ranked recommendations by fulfilment strategy.

Combined: one organisation handles both care and transport (org_type
"both", or a care organisation with a worker who can drive).

Split: separate care and transport organisations. For care-only or
transport-only requests every result lands in the matching split bucket
and combined stays empty.

Each bucket is re-ranked on its own, so ranks are bucket-local.
"""

from typing import Dict, List
import logging

from core.matcher.models import VerifiedOrganisation
from core.scorer.models import ScoredRecommendation
from core.scorer.ranking import rank_recommendations
from core.recommender.models import RecommendationGroups

logger = logging.getLogger(__name__)


def route_recommendation(org_type: str, has_driving_worker: bool) -> str:
    """Bucket for one recommendation of a "both" request."""
    if org_type == "both" or (org_type == "care" and has_driving_worker):
        return "combined"
    if org_type == "transport":
        return "transport"
    return "care"


def group_recommendations(
    request_type: str,
    ranked: List[ScoredRecommendation],
    verified_map: Dict[str, VerifiedOrganisation]
) -> RecommendationGroups:
    if request_type != "both":
        bucket = rank_recommendations(list(ranked))
        if request_type == "transport":
            return RecommendationGroups(transport=bucket)
        return RecommendationGroups(care=bucket)

    buckets: Dict[str, List[ScoredRecommendation]] = {"combined": [], "care": [], "transport": []}
    for rec in ranked:
        verified = verified_map.get(rec.organisation_id)
        org_type = verified.candidate.org_type if verified else "care"
        has_driver = verified.has_driving_worker if verified else False
        buckets[route_recommendation(org_type, has_driver)].append(rec)

    groups = RecommendationGroups(
        combined=rank_recommendations(buckets["combined"]),
        care=rank_recommendations(buckets["care"]),
        transport=rank_recommendations(buckets["transport"]),
    )
    logger.info(
        f"Grouped {len(ranked)} recommendations: combined={len(groups.combined)}, "
        f"care={len(groups.care)}, transport={len(groups.transport)}"
    )
    return groups
