"""Matcher Module - candidate retrieval and hard-constraint verification."""
from core.matcher.models import (
    MatchSpec, MatchRequirements, Coordinates,
    OrganisationCandidate, WorkerCandidate,
    VerificationResult, VerifiedOrganisation, VerifiedWorker
)
from core.matcher.interfaces import CandidateSource, AuthoritativeStore, DynamicContextProvider
from core.matcher.verifier import VerificationService

__all__ = [
    'VerificationService',
    'CandidateSource', 'AuthoritativeStore', 'DynamicContextProvider',
    'MatchSpec', 'MatchRequirements', 'Coordinates',
    'OrganisationCandidate', 'WorkerCandidate',
    'VerificationResult', 'VerifiedOrganisation', 'VerifiedWorker'
]
