#!/usr/bin/env python3
"""
Unit tests for the per-dimension match factor calculators.
"""

import unittest

from core.scorer import factors
from core.scorer.models import OutcomeHistory


class TestBaseFactors(unittest.TestCase):
    """Proximity, capability, availability and verification factors."""

    def test_proximity_without_distance_is_neutral(self):
        factor = factors.proximity_factor(None, 25.0)
        self.assertEqual(factor.name, "proximity")
        self.assertEqual(factor.score, 0.5)
        self.assertEqual(factor.explanation, "Location not available")

    def test_proximity_scales_with_distance(self):
        factor = factors.proximity_factor(5.0, 25.0)
        self.assertEqual(factor.score, 0.8)
        self.assertEqual(factor.explanation, "5.0 km away")

    def test_proximity_beyond_radius_is_zero(self):
        self.assertEqual(factors.proximity_factor(40.0, 25.0).score, 0.0)

    def test_capability_nothing_required(self):
        factor = factors.capability_factor(["driving"], [], ["personal_care"], [])
        self.assertEqual(factor.score, 1.0)
        self.assertEqual(factor.explanation, "No specific capabilities required")

    def test_capability_partial_match_lists_missing(self):
        factor = factors.capability_factor(
            ["manual_handling"],
            ["manual_handling", "wheelchair_transfer"],
            ["personal_care"],
            ["personal_care", "community_access"],
        )
        self.assertEqual(factor.score, 0.5)
        self.assertEqual(factor.explanation, "Missing: wheelchair_transfer, community_access")

    def test_availability(self):
        self.assertEqual(factors.availability_factor(True).score, 1.0)
        self.assertEqual(factors.availability_factor(False).score, 0.3)

    def test_verification_levels(self):
        self.assertEqual(factors.verification_factor(True, True).score, 1.0)
        self.assertEqual(factors.verification_factor(False, True).score, 0.4)

        outside_pool = factors.verification_factor(True, False)
        self.assertEqual(outside_pool.score, 0.7)
        self.assertEqual(outside_pool.explanation, "Not in participant's provider pool")


class TestContextFactors(unittest.TestCase):
    """Reliability, preference alignment, urgency and emotional comfort."""

    def test_reliability_without_history(self):
        factor = factors.reliability_factor(80.0)
        self.assertEqual(factor.score, 0.8)
        self.assertEqual(factor.explanation, "Base reliability: 80/100")

    def test_reliability_history_blends_in(self):
        factor = factors.reliability_factor(100.0, OutcomeHistory(completed_bookings=4, positive_rate=1.0))
        self.assertEqual(factor.score, 1.0)
        self.assertIn("4 bookings (100% positive)", factor.explanation)

    def test_reliability_ignores_empty_history(self):
        factor = factors.reliability_factor(60.0, OutcomeHistory(completed_bookings=0, positive_rate=0.0))
        self.assertEqual(factor.score, 0.6)
        self.assertNotIn("bookings", factor.explanation)

    def test_preference_without_preferences(self):
        factor = factors.preference_alignment_factor(["driving"], [], False, False)
        self.assertEqual(factor.score, 0.7)
        self.assertEqual(factor.explanation, "No specific preferences expressed")

    def test_preference_hit_ratio_counts_units(self):
        factor = factors.preference_alignment_factor(
            ["wheelchair_transfer"], ["wheelchair_transfer", "aac"], False, False
        )
        self.assertEqual(factor.score, 0.5)
        self.assertEqual(factor.explanation, "50% of preferences matched; unmet: aac")

    def test_preference_weights_favour_critical_dimension(self):
        weights = {"accessibility": 1.0, "communication_support": 0.0}
        factor = factors.preference_alignment_factor(
            ["wheelchair_transfer"], ["wheelchair_transfer", "aac"], False, False, weights
        )
        # 5 / (5 + 1)
        self.assertEqual(factor.score, 0.8)

    def test_preference_sensory_support(self):
        met = factors.preference_alignment_factor(["aac"], [], True, False)
        unmet = factors.preference_alignment_factor(["driving"], [], True, False)
        self.assertEqual(met.score, 1.0)
        self.assertEqual(unmet.score, 0.0)
        self.assertIn("unmet: sensory", unmet.explanation)

    def test_preference_continuity_worker_always_met(self):
        factor = factors.preference_alignment_factor([], [], False, True)
        self.assertEqual(factor.score, 1.0)
        self.assertIn("(continuity worker)", factor.explanation)

    def test_urgency_bonus_table(self):
        cases = [
            (("urgent", "routine", True), 1.0),
            (("emergency", "routine", False), 0.3),
            (("standard", "soon", True), 1.0),
            (("standard", "urgent", False), 0.3),
            (("standard", "routine", True), 0.8),
            (("standard", "routine", False), 0.5),
            (("low", "routine", True), 0.6),
        ]
        for args, expected in cases:
            with self.subTest(args=args):
                self.assertEqual(factors.urgency_bonus_factor(*args).score, expected)

    def test_emotional_comfort_calm(self):
        self.assertEqual(factors.emotional_comfort_factor("calm", False, False, False).score, 0.7)
        familiar = factors.emotional_comfort_factor("calm", False, False, True)
        self.assertEqual(familiar.score, 0.9)
        self.assertEqual(familiar.explanation, "Participant calm; Familiar provider")

    def test_emotional_comfort_stressed(self):
        bare = factors.emotional_comfort_factor("anxious", False, False, False)
        self.assertEqual(bare.score, 0.5)
        self.assertEqual(bare.explanation, "Default comfort")

        full = factors.emotional_comfort_factor("distressed", True, True, True)
        self.assertEqual(full.score, 1.0)
        self.assertIn("PBS capability", full.explanation)


if __name__ == '__main__':
    unittest.main()
