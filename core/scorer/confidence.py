#!/usr/bin/env python3
"""
Confidence & Reasoning - classify and explain a scored recommendation.

Confidence depends only on the verification outcome and the organisation's
verified flag, never on the numeric score.
"""

from typing import List

from core.matcher.models import VerificationResult
from core.scorer.models import MatchFactor

STRONG_FACTOR_THRESHOLD = 0.7
WEAK_FACTOR_THRESHOLD = 0.5
MAX_STRONG_FACTORS = 4

CONFIDENCE_NOTES = {
    "verified": "All key constraints verified.",
    "likely": "Most constraints verified; organisation awaiting full verification.",
    "needs_verification": "Some constraints could not be verified; coordinator should confirm.",
}


def assign_confidence(verification: VerificationResult, organisation_verified: bool) -> str:
    if (
        verification.unknowns
        or not verification.availability_confirmed
        or verification.vehicle_available is False
        or verification.clearance_current is False
    ):
        return "needs_verification"
    if not organisation_verified:
        return "likely"
    return "verified"


def build_reasoning(factors: List[MatchFactor], confidence: str) -> str:
    strong = [
        f.explanation for f in factors
        if f.score >= STRONG_FACTOR_THRESHOLD and f.explanation
    ][:MAX_STRONG_FACTORS]
    weak = [
        f"⚠ {f.name}: {f.explanation}" for f in factors
        if f.score < WEAK_FACTOR_THRESHOLD and f.explanation
    ]

    parts = []
    if strong:
        parts.append(". ".join(strong))
    if weak:
        parts.append(". ".join(weak))
    parts.append(CONFIDENCE_NOTES[confidence])
    return ". ".join(parts)
