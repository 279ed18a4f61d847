#!/usr/bin/env python3
"""
Unit tests for learning preference weights from service outcomes.
"""

import unittest

from core.scorer.preferences import (
    DEFAULT_WEIGHTS,
    ServiceOutcome,
    apply_weight_adjustments,
    compute_weight_adjustments,
    outcome_sentiment,
    parse_weights,
    update_weights_from_outcome,
    weight_for_need,
)
from core.scorer.factors import preference_alignment_factor


class TestPreferenceWeights(unittest.TestCase):

    def test_weight_for_need(self):
        self.assertEqual(weight_for_need("wheelchair_transfer", None), 1.0)
        self.assertAlmostEqual(weight_for_need("wheelchair_transfer", {"accessibility": 0.8}), 4.2)
        self.assertEqual(weight_for_need("gardening", {"accessibility": 0.8}), 1.0)
        # Missing dimension falls back to its default weight
        self.assertAlmostEqual(weight_for_need("aac", {"accessibility": 0.8}), 2.2)

    def test_outcome_sentiment(self):
        self.assertEqual(outcome_sentiment(1), "negative")
        self.assertEqual(outcome_sentiment(2), "negative")
        self.assertEqual(outcome_sentiment(3), "neutral")
        self.assertEqual(outcome_sentiment(4), "positive")
        self.assertEqual(outcome_sentiment(5), "positive")

    def test_parse_weights_defaults_and_clamps(self):
        weights = parse_weights({"weights": {"safety": 1.7, "continuity": "high", "punctuality": 0.2}})
        self.assertEqual(weights["safety"], 1.0)
        self.assertEqual(weights["continuity"], DEFAULT_WEIGHTS["continuity"])
        self.assertEqual(weights["punctuality"], 0.2)
        self.assertEqual(parse_weights(None), DEFAULT_WEIGHTS)

    def test_poor_outcome_adjustments(self):
        outcome = ServiceOutcome(
            comfort_rating=2,
            accessibility_met=False,
            continuity_preference="same_worker",
            emotional_aftercare_needed=True,
            safety_concerns="Driver rushed the transfer",
            additional_needs_noted=["hearing_support", "aac"],
            would_use_again=False,
        )
        deltas = {a.key: a.delta for a in compute_weight_adjustments(outcome)}
        self.assertEqual(deltas, {
            "accessibility": 0.15,
            "sensory_quality": 0.10,
            "communication_support": 0.10,
            "continuity": 0.10,
            "emotional_comfort": 0.10,
            "safety": 0.15,
        })

    def test_good_outcome_decays_accessibility(self):
        outcome = ServiceOutcome(comfort_rating=5, accessibility_met=True,
                                 continuity_preference="different_worker")
        deltas = {a.key: a.delta for a in compute_weight_adjustments(outcome)}
        self.assertEqual(deltas, {"continuity": -0.10, "accessibility": -0.03})

    def test_apply_clamps_to_unit_range(self):
        outcome = ServiceOutcome(comfort_rating=1, accessibility_met=False)
        updated = apply_weight_adjustments({"accessibility": 0.95}, compute_weight_adjustments(outcome))
        self.assertEqual(updated["accessibility"], 1.0)

    def test_update_from_stored_preferences(self):
        outcome = ServiceOutcome(comfort_rating=3, accessibility_met=False)
        weights, adjustments = update_weights_from_outcome({"weights": {"accessibility": 0.5}}, outcome)
        self.assertAlmostEqual(weights["accessibility"], 0.65)
        self.assertEqual(len(adjustments), 1)
        self.assertEqual(weights["safety"], DEFAULT_WEIGHTS["safety"])


class TestLearnedWeightsInScoring(unittest.TestCase):
    """Weights learned from an outcome change the next run's alignment score."""

    def _learned(self, **outcome_fields):
        outcome = ServiceOutcome(**outcome_fields)
        return apply_weight_adjustments(DEFAULT_WEIGHTS, compute_weight_adjustments(outcome))

    def test_accessibility_mismatch_penalises_candidate_without_wheelchair(self):
        learned = self._learned(comfort_rating=2, accessibility_met=False)
        self.assertGreater(learned["accessibility"], DEFAULT_WEIGHTS["accessibility"])

        needs = ["wheelchair", "personal_care"]
        before = preference_alignment_factor(["personal_care"], needs, False, False, DEFAULT_WEIGHTS)
        after = preference_alignment_factor(["personal_care"], needs, False, False, learned)
        self.assertEqual(before.score, 0.3)
        self.assertEqual(after.score, 0.2)
        self.assertLess(after.score, before.score)

    def test_candidate_meeting_the_need_is_unaffected(self):
        learned = self._learned(comfort_rating=2, accessibility_met=False)
        needs = ["wheelchair", "personal_care"]
        before = preference_alignment_factor(needs, needs, False, False, DEFAULT_WEIGHTS)
        after = preference_alignment_factor(needs, needs, False, False, learned)
        self.assertEqual(after.score, before.score)
        self.assertEqual(after.score, 1.0)

    def test_sensory_discomfort_marks_unmet_sensory(self):
        learned = self._learned(comfort_rating=2, additional_needs_noted=["sensory_support", "hearing_support"],
                                accessibility_met=True)
        self.assertGreater(learned["sensory_quality"], DEFAULT_WEIGHTS["sensory_quality"])

        without = preference_alignment_factor(["personal_care"], ["personal_care"], True, False, learned)
        self.assertIn("unmet: sensory", without.explanation)
        self.assertLess(without.score, 1.0)

        with_support = preference_alignment_factor(
            ["personal_care", "sensory_support"], ["personal_care"], True, False, learned
        )
        self.assertEqual(with_support.score, 1.0)

    def test_elevated_continuity_weight(self):
        learned = self._learned(comfort_rating=4, accessibility_met=True, continuity_preference="same_worker")
        self.assertGreater(learned["continuity"], DEFAULT_WEIGHTS["continuity"])
        factor = preference_alignment_factor(["personal_care"], ["personal_care"], False, True, learned)
        self.assertGreater(factor.score, 0.5)

    def test_repeated_mismatches_accumulate(self):
        weights = dict(DEFAULT_WEIGHTS)
        for _ in range(3):
            outcome = ServiceOutcome(comfort_rating=4, accessibility_met=False)
            weights = apply_weight_adjustments(weights, compute_weight_adjustments(outcome))
        self.assertGreaterEqual(weights["accessibility"], 0.9)
        self.assertLessEqual(weights["accessibility"], 1.0)

    def test_positive_outcomes_decay_slowly(self):
        weights = dict(DEFAULT_WEIGHTS, accessibility=0.8)
        for _ in range(5):
            outcome = ServiceOutcome(comfort_rating=5, accessibility_met=True)
            weights = apply_weight_adjustments(weights, compute_weight_adjustments(outcome))
        self.assertLess(weights["accessibility"], 0.8)
        self.assertGreater(weights["accessibility"], DEFAULT_WEIGHTS["accessibility"])


if __name__ == '__main__':
    unittest.main()
