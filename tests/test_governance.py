"""
Tests for src/governance.py — tiers, quorum, approval and outcomes.
"""
from datetime import timedelta

import pytest

from src.governance import (
    dao_tier_for_amount, sponsor_tier_for_amount, sponsor_bonus_amount,
    calculate_quorum, approval_threshold_bps, voting_period, approval_bps,
    quorum_progress_percent, proposal_outcome,
)


class TestDaoTier:

    @pytest.mark.parametrize("amount,expected", [
        (0.5, 1), (1, 1), (5.0, 2), (10, 2), (25.0, 3), (1e9, 3),
    ])
    def test_tier_by_amount(self, agora_data, amount, expected):
        tiers = agora_data.dao_treasury.voting_tiers
        assert dao_tier_for_amount(amount, tiers).tier == expected

    def test_listed_dao_proposals_match_their_tier(self, agora_data):
        tiers = agora_data.dao_treasury.voting_tiers
        for p in agora_data.proposals.dao_proposals:
            assert dao_tier_for_amount(p.requested_amount, tiers).tier == p.tier

    def test_no_covering_tier(self, agora_data):
        capped = agora_data.dao_treasury.voting_tiers[:2]
        with pytest.raises(ValueError):
            dao_tier_for_amount(50, capped)


class TestSponsorTier:

    def test_below_bronze(self, agora_data):
        assert sponsor_tier_for_amount(0.5, agora_data.gas_pool.tiers) is None

    def test_exact_threshold(self, agora_data):
        assert sponsor_tier_for_amount(1, agora_data.gas_pool.tiers) == "bronze"

    def test_between_thresholds(self, agora_data):
        assert sponsor_tier_for_amount(150, agora_data.gas_pool.tiers) == "gold"

    def test_top_tier(self, agora_data):
        assert sponsor_tier_for_amount(25_000, agora_data.gas_pool.tiers) == "diamond"

    def test_listed_sponsors_consistent(self, agora_data):
        tiers = agora_data.gas_pool.tiers
        for s in agora_data.gas_pool.sponsors:
            assert sponsor_tier_for_amount(s.amount, tiers) == s.tier

    def test_bonus_amounts(self, agora_data):
        tiers = agora_data.gas_pool.tiers
        assert sponsor_bonus_amount(tiers["bronze"]) == pytest.approx(0.2)
        assert sponsor_bonus_amount(tiers["silver"]) == pytest.approx(1.5)
        assert sponsor_bonus_amount(tiers["diamond"]) == pytest.approx(300)


class TestQuorum:

    def test_minimum_applies_for_small_protocol(self):
        assert calculate_quorum(142_500, "standard") == 10_000

    def test_percentage_applies_when_larger(self):
        assert calculate_quorum(2_000_000, "standard") == 20_000
        assert calculate_quorum(2_000_000, "constitutional") == 200_000

    def test_sanction_minimum(self):
        assert calculate_quorum(0, "sanction") == 50_000

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown proposal type"):
            calculate_quorum(1000, "emergency")


class TestThresholds:

    def test_approval_thresholds(self):
        assert approval_threshold_bps("standard") == 5001
        assert approval_threshold_bps("treasury") == 5001
        assert approval_threshold_bps("sanction") == 6700
        assert approval_threshold_bps("constitutional") == 7500

    def test_voting_periods(self):
        assert voting_period("standard") == timedelta(days=3)
        assert voting_period("treasury") == timedelta(days=7)
        assert voting_period("sanction") == timedelta(days=14)

    def test_approval_bps_truncates(self):
        assert approval_bps(2, 1) == 6666

    def test_approval_bps_no_votes(self):
        assert approval_bps(0, 0) == 0


class TestQuorumProgress:

    def test_over_quorum(self):
        assert quorum_progress_percent(18_680, 15_000) == 125

    def test_no_votes(self):
        assert quorum_progress_percent(0, 25_000) == 0

    def test_zero_quorum(self):
        assert quorum_progress_percent(10, 0) == 0


class TestProposalOutcome:

    def test_passed(self):
        out = proposal_outcome(6000, 4000, 10_000, "standard")
        assert out.status == "passed"
        assert out.quorum_reached and out.bond_returned
        assert out.reputation_change == 2
        assert out.approval_bps == 6000

    def test_exact_half_is_rejected(self):
        out = proposal_outcome(5000, 5000, 10_000, "standard")
        assert out.status == "rejected"
        assert out.reputation_change == 1
        assert out.bond_returned

    def test_sanction_needs_supermajority(self):
        assert proposal_outcome(6600, 3400, 10_000, "sanction").status == "rejected"
        assert proposal_outcome(6700, 3300, 10_000, "sanction").status == "passed"

    @pytest.mark.parametrize("yes,no,rep", [
        (3000, 2000, -1),     # 50% of quorum
        (2000, 600, -2),      # 26%
        (100, 0, -3),         # 1%
    ])
    def test_expired_reputation(self, yes, no, rep):
        out = proposal_outcome(yes, no, 10_000, "treasury")
        assert out.status == "expired"
        assert not out.quorum_reached
        assert not out.bond_returned
        assert out.reputation_change == rep
