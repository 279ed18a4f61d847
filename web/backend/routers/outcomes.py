#!/usr/bin/env python3
"""
Booking outcome endpoints - capture feedback after a completed service.
"""

import logging
import uuid
from fastapi import APIRouter, Depends

from core.app_context import AppContext
from ..dependencies import get_app_context
from ..models.requests import OutcomeRequest
from ..models.responses import OutcomeResponse
from ..services.outcome_service import OutcomeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["outcomes"])


@router.post("/{booking_id}/outcome", response_model=OutcomeResponse, status_code=201)
def submit_outcome(
    booking_id: uuid.UUID,
    request: OutcomeRequest,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Record a post-service outcome for a booking.

    The outcome is stored and the participant's preference weights are
    adjusted, so the next recommendation run scores against them.
    """
    return OutcomeService(ctx).record(str(booking_id), request)
