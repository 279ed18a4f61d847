#!/usr/bin/env python3
"""
Unit tests for re-ranking recommendations against an updated context.
"""

import unittest
from copy import deepcopy

from core.scorer.models import DynamicRiskContext, MatchFactor, ScoredRecommendation
from core.recommender.reorder import reorder_recommendations
from core.scorer.factors import proximity_factor


def _factors(extra=None):
    factors = [
        MatchFactor("proximity", 0.8, "4.0 km away"),
        MatchFactor("capability_match", 1.0, "All capabilities matched"),
        MatchFactor("availability", 1.0, "Availability confirmed"),
        MatchFactor("verification_status", 1.0, "Organisation verified"),
        MatchFactor("preference_alignment", 0.7, "No specific preferences expressed"),
        MatchFactor("reliability", 0.8, "Base reliability: 80/100"),
        MatchFactor("urgency_bonus", 0.8, "Standard urgency"),
        MatchFactor("emotional_comfort", 0.7, "Participant calm"),
    ]
    return factors + (extra or [])


def _rec(org_id: str, score: float, rank: int, capabilities=None) -> ScoredRecommendation:
    return ScoredRecommendation(
        organisation_id=org_id,
        organisation_name=org_id,
        score=score,
        confidence="verified",
        rank=rank,
        match_factors=_factors(),
        matched_capabilities=list(capabilities or []),
        unknowns=[],
    )


class TestReorderEngine(unittest.TestCase):

    def setUp(self):
        self.recs = [
            _rec("plain", 80.0, 1),
            _rec("pbs", 79.0, 2, capabilities=["positive_behaviour_support"]),
        ]

    def test_empty_input(self):
        result = reorder_recommendations([], DynamicRiskContext())
        self.assertEqual(result.recommendations, [])
        self.assertEqual(result.changes_applied, [])
        self.assertTrue(result.reordered_at)

    def test_distress_promotes_behaviour_support(self):
        context = DynamicRiskContext(emotional_state="distressed")
        result = reorder_recommendations(self.recs, context)

        self.assertEqual([r.organisation_id for r in result.recommendations], ["pbs", "plain"])
        self.assertEqual([r.rank for r in result.recommendations], [1, 2])
        self.assertEqual(result.moved_organisation_ids, ["plain", "pbs"])
        self.assertIn("2 recommendations moved", result.changes_applied)
        self.assertIn("emotional=distressed", result.changes_applied)

    def test_inputs_not_mutated(self):
        before = deepcopy(self.recs)
        reorder_recommendations(self.recs, DynamicRiskContext(emotional_state="distressed"))
        self.assertEqual(self.recs, before)

    def test_only_context_factors_recomputed(self):
        context = DynamicRiskContext(emotional_state="anxious", needs_urgency="urgent")
        result = reorder_recommendations(self.recs, context, match_urgency="standard")

        rec = next(r for r in result.recommendations if r.organisation_id == "plain")
        self.assertEqual([f.name for f in rec.match_factors], [f.name for f in _factors()])
        self.assertEqual(rec.factor("proximity").score, 0.8)
        self.assertEqual(rec.factor("reliability").score, 0.8)
        self.assertEqual(rec.factor("urgency_bonus").score, 1.0)
        self.assertEqual(rec.factor("emotional_comfort").score, 0.5)
        self.assertIsNotNone(rec.score_breakdown)

    def test_unchanged_context_keeps_order(self):
        result = reorder_recommendations(self.recs, DynamicRiskContext())
        self.assertEqual([r.organisation_id for r in result.recommendations], ["plain", "pbs"])
        self.assertEqual(result.moved_organisation_ids, [])
        self.assertNotIn("recommendations moved", " ".join(result.changes_applied))


    def test_single_recommendation_ranks_first(self):
        result = reorder_recommendations([self.recs[1]], DynamicRiskContext(emotional_state="anxious"))
        self.assertEqual(len(result.recommendations), 1)
        self.assertEqual(result.recommendations[0].rank, 1)
        self.assertEqual(result.moved_organisation_ids, [])

    def test_missing_prior_factors_default_to_neutral(self):
        bare = ScoredRecommendation(
            organisation_id="bare", organisation_name="bare", score=0.0, confidence="likely",
        )
        result = reorder_recommendations([bare], DynamicRiskContext())

        rec = result.recommendations[0]
        self.assertEqual(rec.rank, 1)
        # (0.5 + 0.7 * 0.4 + 0.5 * 0.3 + 0.5 * 0.2 + 0.7 * 0.1) / 2.0
        self.assertEqual(rec.score, 55.0)
        self.assertEqual(rec.score_breakdown.base_match, 50.0)
        self.assertEqual(rec.score_breakdown.reliability, 50.0)
        self.assertIsNone(rec.factor("reliability"))
        self.assertEqual(
            [f.name for f in rec.match_factors],
            ["preference_alignment", "urgency_bonus", "emotional_comfort"],
        )

    def test_base_factors_preserved(self):
        context = DynamicRiskContext(
            emotional_state="distressed", needs_urgency="urgent", functional_needs=["aac"]
        )
        result = reorder_recommendations(self.recs, context, match_urgency="urgent")

        for rec in result.recommendations:
            for name in ("proximity", "capability_match", "availability", "verification_status", "reliability"):
                before = next(f for f in _factors() if f.name == name)
                self.assertEqual(rec.factor(name), before)

    def test_near_provider_stays_ahead_of_far_one(self):
        near_proximity = proximity_factor(2.0, 25.0)
        far_proximity = proximity_factor(20.0, 25.0)
        self.assertEqual(near_proximity.score, 0.9)
        self.assertEqual(far_proximity.score, 0.2)

        far = _rec("far", 70.0, 1)
        far.match_factors[0] = far_proximity
        near = _rec("near", 60.0, 2)
        near.match_factors[0] = near_proximity

        result = reorder_recommendations([far, near], DynamicRiskContext(emotional_state="anxious"))

        self.assertEqual([r.organisation_id for r in result.recommendations], ["near", "far"])
        self.assertEqual(result.recommendations[0].factor("proximity").score, 0.9)
        self.assertEqual(result.recommendations[1].factor("proximity").score, 0.2)
        self.assertGreater(result.recommendations[0].score, result.recommendations[1].score)


if __name__ == '__main__':
    unittest.main()
