"""
Tests for src/data_store.py — snapshot construction and serialization.
"""
import json
import math
import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from src.data_store import build_agora_data, get_agora_data, reset_agora_data, to_dict


class TestBuildAgoraData:

    def test_anchored_to_now(self, agora_data, fixed_now):
        assert agora_data.generated_at == fixed_now
        assert agora_data.treasury.last_updated == fixed_now

    def test_naive_now_treated_as_utc(self):
        data = build_agora_data(now=datetime(2025, 6, 1, 8, 0))
        assert data.generated_at.tzinfo == timezone.utc

    def test_default_now_is_recent(self):
        data = build_agora_data()
        assert abs(datetime.now(timezone.utc) - data.generated_at) < timedelta(minutes=1)

    def test_gas_pool(self, agora_data):
        pool = agora_data.gas_pool
        assert pool.total_balance == 7500
        assert pool.used_balance == 2500
        assert pool.active_sponsors == 50
        assert list(pool.tiers) == ["bronze", "silver", "gold", "platinum", "diamond"]
        assert pool.tiers["gold"].monthly_limit == 40000
        assert pool.tiers["diamond"].bonus_percent == 3
        assert [s.name for s in pool.sponsors][0] == "Solana Foundation"

    def test_voting_tiers_ordered(self, agora_data):
        tiers = agora_data.dao_treasury.voting_tiers
        assert [t.tier for t in tiers] == [1, 2, 3]
        assert tiers[0].duration == "24h"
        assert math.isinf(tiers[2].max_amount)

    def test_token_treasury_net_flow(self, agora_data):
        assert agora_data.treasury.net_flow_last_30_days == 74500

    def test_proposal_timestamps(self, agora_data, fixed_now):
        p47 = agora_data.find_proposal("AGP-47")
        assert p47.end_time == fixed_now + timedelta(days=3)
        assert p47.created_at == fixed_now - timedelta(days=4)

    def test_unscheduled_proposal_has_no_end(self, agora_data):
        assert agora_data.find_proposal("AGP-46").end_time is None

    def test_proposal_counts(self, agora_data):
        assert agora_data.proposals.total_count == 47
        assert agora_data.proposals.active_count == 3
        assert len(agora_data.proposals.items) == 3
        assert agora_data.find_proposal("AGP-47").total_votes == 18680

    def test_dao_proposals(self, agora_data):
        dao = agora_data.proposals.dao_proposals
        assert [d.id for d in dao] == ["001", "002"]
        assert dao[0].total_votes == 60
        assert dao[1].tier == 3

    def test_unknown_proposal_raises(self, agora_data):
        with pytest.raises(KeyError):
            agora_data.find_proposal("AGP-1")

    def test_voting_deadline(self, agora_data, fixed_now):
        assert agora_data.voting.next_deadline == fixed_now + timedelta(days=3)

    def test_sanctions(self, agora_data, fixed_now):
        xyz, abc = agora_data.sanctions.active
        assert xyz.sanction_rate == 1000
        assert xyz.imposed_at == fixed_now - timedelta(days=30)
        assert xyz.expires_at == fixed_now + timedelta(days=47)
        assert abc.expires_at == fixed_now + timedelta(days=120)
        assert agora_data.sanctions.historical_count == 5
        assert agora_data.sanctions.historical[0].was_lifted is True

    def test_sanction_proposal_not_cross_checked(self, agora_data):
        # AGP-38 is not in the recent proposal list
        xyz = agora_data.sanctions.active[0]
        with pytest.raises(KeyError):
            agora_data.find_proposal(xyz.proposal_id)

    def test_protocol_stats(self, agora_data):
        assert agora_data.protocol.total_users == 142500
        assert agora_data.protocol.burn_share == 50

    def test_records_are_frozen(self, agora_data):
        with pytest.raises(dataclasses.FrozenInstanceError):
            agora_data.gas_pool.total_balance = 0


class TestCachedSnapshot:

    def test_same_object_until_reset(self):
        reset_agora_data()
        first = get_agora_data()
        assert get_agora_data() is first
        reset_agora_data()
        assert get_agora_data() is not first


class TestToDict:

    def test_datetimes_are_iso(self, agora_data, fixed_now):
        d = to_dict(agora_data)
        assert d["generated_at"] == fixed_now.isoformat()
        assert d["proposals"]["items"][1]["end_time"] is None

    def test_unbounded_tier_is_null(self, agora_data):
        d = to_dict(agora_data)
        assert d["dao_treasury"]["voting_tiers"][2]["max_amount"] is None
        assert d["dao_treasury"]["voting_tiers"][0]["max_amount"] == 1

    def test_json_serializable(self, agora_data):
        text = json.dumps(to_dict(agora_data))
        assert "AGP-47" in text

    def test_tier_keys_preserved(self, agora_data):
        d = to_dict(agora_data)
        assert d["gas_pool"]["tiers"]["bronze"]["contribution_amount"] == 1
