"""
Tests for the FastAPI surface — routes, response shapes, error mapping.
"""
import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

import api.main
from api.main import app
from api.dependencies import get_snapshot


@pytest.fixture
def client(live_agora_data):
    app.dependency_overrides[get_snapshot] = lambda: live_agora_data
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestTreasuryRoutes:

    def test_gas_pool(self, client):
        body = client.get("/treasury/gas-pool").json()
        assert body["usage_percent"] == 25
        assert body["total_balance_display"] == "7,500 SOL"
        assert body["subsidized_users_display"] == "75K"
        bronze = body["tiers"][0]
        assert bronze["name"] == "bronze"
        assert bronze["bonus_amount"] == pytest.approx(0.2)
        assert bronze["monthly_limit_display"] == "800"

    def test_dao_treasury(self, client):
        body = client.get("/treasury/dao").json()
        assert body["sol_balance_display"] == "120 SOL"
        assert body["voting_tiers"][2]["max_amount"] is None
        assert body["voting_tiers"][1]["duration"] == "3 days"

    def test_token_treasury(self, client):
        body = client.get("/treasury/token").json()
        assert body["agora_balance_display"] == "2.4M"
        assert body["inflow_display"] == "124.5K"
        assert body["net_flow_last_30_days"] == 74500


class TestGovernanceRoutes:

    def test_list_proposals(self, client):
        body = client.get("/governance/proposals").json()
        assert body["total_count"] == 47
        ids = [p["id"] for p in body["items"]]
        assert ids == ["AGP-47", "AGP-46", "AGP-45"]

    def test_filter_by_status(self, client):
        body = client.get("/governance/proposals", params={"status": "review"}).json()
        assert [p["id"] for p in body["items"]] == ["AGP-46"]

    def test_single_proposal(self, client):
        body = client.get("/governance/proposals/AGP-45").json()
        assert body["yes_percent"] == 84
        assert body["quorum_progress"] == 100
        assert body["approval_threshold_bps"] == 5001
        assert body["time_remaining"]["expired"] is False

    def test_unscheduled_proposal_has_no_countdown(self, client):
        body = client.get("/governance/proposals/AGP-46").json()
        assert body["end_time"] is None
        assert body["time_remaining"] is None
        assert body["yes_percent"] == 0

    def test_unknown_proposal_is_404(self, client):
        resp = client.get("/governance/proposals/AGP-999")
        assert resp.status_code == 404

    def test_dao_proposals(self, client):
        body = client.get("/governance/dao-proposals").json()
        first = body[0]
        assert first["split"] == {"yes": 68, "no": 22, "abstain": 10}
        assert first["requested_amount_display"] == "5 SOL"
        assert first["tier_duration"] == "3 days"

    def test_voting(self, client):
        body = client.get("/governance/voting").json()
        assert body["pending_votes"] == 2
        assert body["time_remaining"]["expired"] is False


class TestSanctionRoutes:

    def test_active_sanctions(self, client):
        body = client.get("/sanctions").json()
        assert body["active_count"] == 2
        xyz = body["active"][0]
        assert xyz["rate_percent"] == 10
        assert xyz["approval_percent"] == 79
        assert body["historical"][0]["was_lifted"] is True


class TestProtocolRoutes:

    def test_stats(self, client):
        body = client.get("/protocol/stats").json()
        assert body["total_users"] == 142500
        assert body["display"]["total_users"] == "142.5K"
        assert body["display"]["burn_share"] == "50%"

    def test_raw_snapshot(self, client):
        body = client.get("/protocol/snapshot").json()
        assert body["data"]["gas_pool"]["total_balance"] == 7500
        assert body["data"]["dao_treasury"]["voting_tiers"][2]["max_amount"] is None


def _request_count(endpoint):
    value = REGISTRY.get_sample_value("agora_api_requests_total", {"endpoint": endpoint})
    return value or 0.0


class TestRequestMetrics:

    def test_prefixed_route_counted_under_full_path(self, client):
        before = _request_count("/treasury/gas-pool")
        client.get("/treasury/gas-pool")
        assert _request_count("/treasury/gas-pool") == before + 1

    def test_router_root_route(self, client):
        before = _request_count("/sanctions")
        client.get("/sanctions")
        assert _request_count("/sanctions") == before + 1

    def test_path_parameters_stay_templated(self, client):
        before = _request_count("/governance/proposals/{proposal_id}")
        client.get("/governance/proposals/AGP-47")
        assert _request_count("/governance/proposals/{proposal_id}") == before + 1


class TestStartup:

    def test_logging_configured_on_startup(self, monkeypatch, live_agora_data):
        calls = []
        monkeypatch.setattr(api.main, "configure_logging", calls.append)
        app.dependency_overrides[get_snapshot] = lambda: live_agora_data
        try:
            with TestClient(app):
                pass
        finally:
            app.dependency_overrides.clear()
        assert calls == [api.main.LOG_LEVEL]
