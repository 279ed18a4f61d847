#!/usr/bin/env python3
"""
Recommendation endpoints - run the matching pipeline and re-rank results.
"""

import logging
from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ..dependencies import get_app_context
from ..models.requests import ReorderRequest
from ..models.responses import GroupedRecommendationsResponse, ReorderResponse
from ..services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


@router.post("/{request_id}/run", response_model=GroupedRecommendationsResponse)
def run_recommendations(
    request_id: str,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Run the full recommendation pipeline for a coordination request.

    Searches candidates, verifies hard constraints, scores, ranks and
    groups them, persists the result and returns display-ready cards.
    """
    logger.info(f"Running recommendations for request {request_id}")
    return RecommendationService(ctx).run(request_id)


@router.post("/reorder", response_model=ReorderResponse)
def reorder(
    request: ReorderRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Re-rank previously returned recommendations against an updated context.

    Only preference alignment, urgency bonus and emotional comfort are
    recomputed; nothing is searched, verified or stored.
    """
    return RecommendationService(ctx).reorder(request)
