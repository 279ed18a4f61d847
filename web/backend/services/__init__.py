"""Business logic services."""

from .outcome_service import OutcomeService
from .recommendation_service import RecommendationService
