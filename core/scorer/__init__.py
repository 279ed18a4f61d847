#!/usr/bin/env python3
"""
Scoring Module - weighted multi-factor scoring with dynamic context.

Public API:
- ScoringService: scores verified candidates against a MatchSpec
- ScoredRecommendation: dataclass for scored results
- rank_recommendations: stable descending sort with dense ranks

Modules:
- models.py: Data structures (ScoredRecommendation, MatchFactor, DynamicRiskContext)
- factors.py: One calculator per scoring dimension
- preferences.py: Preference weight learning from service outcomes
- confidence.py: Confidence tier and reasoning text
- ranking.py: Ranker
- persistence.py: Database operations (save_recommendations)
- service.py: ScoringService orchestrator
"""

from core.scorer.models import ScoredRecommendation, DynamicRiskContext, MatchFactor
from core.scorer.service import ScoringService
from core.scorer.ranking import rank_recommendations

__all__ = [
    'ScoringService', 'ScoredRecommendation', 'DynamicRiskContext',
    'MatchFactor', 'rank_recommendations'
]
