#!/usr/bin/env python3
"""
Persistence Operations - Database operations for scored recommendations.

Converts ranked recommendations into recommendation rows and replaces the
stored set for the request (delete, then insert) so retried runs stay
idempotent.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, List

from core.scorer.models import ScoredRecommendation
from core.recommender.models import RecommendationGroups

logger = logging.getLogger(__name__)


def _to_float(value):
    """Convert value to native Python float for database compatibility."""
    if value is None:
        return 0.0
    return float(value)


def recommendation_to_row(rec: ScoredRecommendation, bucket: str) -> Dict[str, Any]:
    return {
        'organisation_id': rec.organisation_id,
        'worker_id': rec.worker_id,
        'vehicle_id': rec.vehicle_id,
        'bucket': bucket,
        'rank': rec.rank,
        'score': _to_float(rec.score),
        'confidence': rec.confidence,
        'reasoning': rec.reasoning,
        'match_factors': [asdict(f) for f in rec.match_factors],
        'score_breakdown': asdict(rec.score_breakdown) if rec.score_breakdown else {},
        'matched_capabilities': list(rec.matched_capabilities),
        'matched_service_types': list(rec.matched_service_types),
        'unknowns': list(rec.unknowns),
        'status': 'pending',
    }


def build_recommendation_rows(groups: RecommendationGroups) -> List[Dict[str, Any]]:
    rows = [recommendation_to_row(r, 'combined') for r in groups.combined]
    rows += [recommendation_to_row(r, 'care') for r in groups.care]
    rows += [recommendation_to_row(r, 'transport') for r in groups.transport]
    return rows


def save_recommendations(request_id: str, groups: RecommendationGroups, repo) -> int:
    """
    Replace the stored recommendations for a request.

    Args:
        request_id: Coordination request id
        groups: Ranked buckets from the grouper
        repo: CareRepository bound to the current unit of work

    Returns:
        Number of rows written
    """
    rows = build_recommendation_rows(groups)
    saved = repo.recommendations.replace_for_request(request_id, rows)
    logger.info(
        f"Saved recommendations for request {request_id}: "
        f"combined={len(groups.combined)}, care={len(groups.care)}, transport={len(groups.transport)}"
    )
    return saved
