#!/usr/bin/env python3
"""
Unit tests for hydrating scored recommendations into display cards.
"""

import unittest

from core.scorer.models import ScoredRecommendation
from core.recommender.hydrator import build_label, confidence_color, evidence_key, hydrate_card, hydrate_cards
from core.recommender.models import EvidenceCounts
from tests.mocks.provider_mocks import make_org, make_verified, make_worker


class TestHydrator(unittest.TestCase):

    def setUp(self):
        org = make_org("org-1", name="Harbour Care", location=(-33.8, 151.2), wav_available=True)
        worker = make_worker("w-1", name="Sam", can_drive=True, capabilities=["driving"])
        self.verified_map = {"org-1": make_verified(org=org, workers=[worker], vehicle_available=True)}
        self.rec = ScoredRecommendation(
            organisation_id="org-1",
            organisation_name="Harbour Care",
            score=88.0,
            confidence="likely",
            rank=1,
            worker_id="w-1",
            worker_name="Sam",
            unknowns=["worker_clearance_unknown"],
        )

    def test_label_and_colour(self):
        self.assertEqual(build_label(self.rec), "Harbour Care – Sam")
        self.assertEqual(confidence_color("verified"), "green")
        self.assertEqual(confidence_color("likely"), "amber")
        self.assertEqual(confidence_color("needs_verification"), "red")

    def test_card_contains_candidate_details(self):
        card = hydrate_card(self.rec, self.verified_map, {})

        self.assertEqual(card.organisation.name, "Harbour Care")
        self.assertEqual(card.organisation.location, {"lat": -33.8, "lng": 151.2})
        self.assertTrue(card.organisation.wav_available)
        self.assertEqual(card.worker.id, "w-1")
        self.assertTrue(card.worker.can_drive)
        self.assertTrue(card.verification.vehicle_available)
        self.assertEqual(card.verification.unknowns, ["worker_clearance_unknown"])
        self.assertEqual(card.confidence_color, "amber")
        self.assertEqual(card.rank, 1)

    def test_evidence_counts_sum_org_and_worker(self):
        counts = {
            "organisation:org-1": EvidenceCounts(total=3, verified=2),
            "worker:w-1": EvidenceCounts(total=2, verified=1),
        }
        card = hydrate_card(self.rec, self.verified_map, counts)
        self.assertEqual(card.verification.evidence_counts, EvidenceCounts(total=5, verified=3))

    def test_evidence_lookup_normalises_uuid_ids(self):
        org_id = "AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE"
        worker_id = "11111111222233334444555555555555"
        rec = ScoredRecommendation(
            organisation_id=org_id, organisation_name="Upper", score=70.0,
            confidence="verified", rank=1, worker_id=worker_id, worker_name="Kai",
        )
        counts = {
            "organisation:aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee": EvidenceCounts(total=2, verified=1),
            "worker:11111111-2222-3333-4444-555555555555": EvidenceCounts(total=1, verified=1),
        }
        card = hydrate_card(rec, {}, counts)
        self.assertEqual(card.verification.evidence_counts, EvidenceCounts(total=3, verified=2))

    def test_evidence_key(self):
        self.assertEqual(evidence_key("organisation", "org-1"), "organisation:org-1")
        self.assertEqual(
            evidence_key("worker", "AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE"),
            "worker:aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee",
        )

    def test_missing_candidate_falls_back(self):
        card = hydrate_card(self.rec, {}, {})
        self.assertEqual(card.organisation.id, "org-1")
        self.assertIsNone(card.worker)
        self.assertFalse(card.verification.availability_confirmed)
        self.assertEqual(card.verification.evidence_counts, EvidenceCounts())

    def test_hydrate_cards_keeps_order(self):
        second = ScoredRecommendation(organisation_id="org-2", organisation_name="Other",
                                      score=50.0, confidence="verified", rank=2)
        cards = hydrate_cards([self.rec, second], self.verified_map, {})
        self.assertEqual([c.organisation_id for c in cards], ["org-1", "org-2"])
        self.assertEqual(cards[1].label, "Other")


if __name__ == '__main__':
    unittest.main()
