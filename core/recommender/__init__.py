"""Recommender Module - grouping, hydration and fast reordering of scored results."""
from core.recommender.models import (
    RecommendationCard, GroupedRecommendations, SplitRecommendations,
    RecommendationMeta, RecommendationGroups, ReorderResult, EvidenceCounts
)
from core.recommender.grouping import group_recommendations
from core.recommender.hydrator import hydrate_card, hydrate_cards
from core.recommender.reorder import reorder_recommendations

__all__ = [
    'group_recommendations', 'hydrate_card', 'hydrate_cards', 'reorder_recommendations',
    'RecommendationCard', 'GroupedRecommendations', 'SplitRecommendations',
    'RecommendationMeta', 'RecommendationGroups', 'ReorderResult', 'EvidenceCounts'
]
