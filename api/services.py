"""
Service layer for the AGORA Governance Dashboard API.
Turns the snapshot into response views, applying the shared formatters.
"""

import math
from datetime import datetime
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from async_lru import alru_cache

from src.data_store import build_agora_data, to_dict
from src.formatting import (
    compact_number, comma_number, sol_amount, time_remaining,
    vote_percentage, vote_percentage_with_abstain,
    sanction_rate_to_percent, gas_pool_usage_percent,
)
from src.governance import (
    approval_threshold_bps, quorum_progress_percent, sponsor_bonus_amount,
)
from src.models import AgoraData, Proposal, DaoProposal, ActiveSanction

from api.schemas import (
    TimeRemainingView, VoteSplitView,
    SponsorTierView, SponsorView, GasPoolResponse,
    VotingTierView, DaoTreasuryResponse, TokenTreasuryResponse,
    ProposalView, ProposalListResponse, DaoProposalView, VotingResponse,
    ActiveSanctionView, HistoricalSanctionView, SanctionsResponse,
    ProtocolStatsResponse, SnapshotResponse,
)


def _remaining(end: datetime, now: Optional[datetime]) -> TimeRemainingView:
    return TimeRemainingView(**time_remaining(end, now)._asdict())


class SnapshotService:
    @staticmethod
    @alru_cache(maxsize=1)
    async def get_snapshot_data() -> AgoraData:
        """
        Snapshot for this API process, built on first request.
        Timestamps stay anchored to that moment so countdowns keep running.
        """
        return await run_in_threadpool(build_agora_data)

    @staticmethod
    def raw_snapshot(data: AgoraData) -> SnapshotResponse:
        return SnapshotResponse(generated_at=data.generated_at, data=to_dict(data))


class TreasuryService:
    @staticmethod
    def gas_pool(data: AgoraData) -> GasPoolResponse:
        pool = data.gas_pool
        tiers = [
            SponsorTierView(
                name=t.name,
                contribution_amount=t.contribution_amount,
                contribution_display=sol_amount(t.contribution_amount),
                monthly_limit=t.monthly_limit,
                monthly_limit_display=compact_number(t.monthly_limit),
                bonus_percent=t.bonus_percent,
                bonus_amount=sponsor_bonus_amount(t),
            )
            for t in pool.tiers.values()
        ]
        sponsors = [
            SponsorView(name=s.name, tier=s.tier, amount=s.amount,
                        amount_display=sol_amount(s.amount))
            for s in pool.sponsors
        ]
        return GasPoolResponse(
            total_balance=pool.total_balance,
            total_balance_display=sol_amount(pool.total_balance),
            used_balance=pool.used_balance,
            used_balance_display=sol_amount(pool.used_balance),
            usage_percent=gas_pool_usage_percent(pool.total_balance, pool.used_balance),
            subsidized_users=pool.subsidized_users,
            subsidized_users_display=compact_number(pool.subsidized_users),
            avg_monthly_usage=pool.avg_monthly_usage,
            active_sponsors=pool.active_sponsors,
            tiers=tiers,
            sponsors=sponsors,
        )

    @staticmethod
    def dao_treasury(data: AgoraData) -> DaoTreasuryResponse:
        dao = data.dao_treasury
        return DaoTreasuryResponse(
            sol_balance=dao.sol_balance,
            sol_balance_display=sol_amount(dao.sol_balance),
            total_spent=dao.total_spent,
            total_spent_display=sol_amount(dao.total_spent),
            total_voters=dao.total_voters,
            voting_tiers=[
                VotingTierView(
                    tier=t.tier,
                    max_amount=None if math.isinf(t.max_amount) else t.max_amount,
                    duration=t.duration,
                    quorum=t.quorum,
                )
                for t in dao.voting_tiers
            ],
        )

    @staticmethod
    def token_treasury(data: AgoraData) -> TokenTreasuryResponse:
        tr = data.treasury
        return TokenTreasuryResponse(
            agora_balance=tr.agora_balance,
            agora_balance_display=compact_number(tr.agora_balance),
            inflow_last_30_days=tr.inflow_last_30_days,
            inflow_display=compact_number(tr.inflow_last_30_days),
            outflow_last_30_days=tr.outflow_last_30_days,
            outflow_display=compact_number(tr.outflow_last_30_days),
            net_flow_last_30_days=tr.net_flow_last_30_days,
            last_updated=tr.last_updated,
        )


class GovernanceService:
    @staticmethod
    def proposal_view(p: Proposal, now: Optional[datetime] = None) -> ProposalView:
        return ProposalView(
            id=p.id,
            title=p.title,
            status=p.status,
            type=p.type,
            proposer=p.proposer,
            description=p.description,
            requested_amount=p.requested_amount,
            requested_amount_display=comma_number(p.requested_amount) + " AGORA",
            votes_yes=p.votes_yes,
            votes_no=p.votes_no,
            yes_percent=vote_percentage(p.votes_yes, p.votes_no),
            quorum=p.quorum,
            quorum_progress=quorum_progress_percent(p.total_votes, p.quorum),
            approval_threshold_bps=approval_threshold_bps(p.type),
            end_time=p.end_time,
            created_at=p.created_at,
            time_remaining=_remaining(p.end_time, now) if p.end_time else None,
        )

    @staticmethod
    def proposals(
        data: AgoraData,
        status: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ProposalListResponse:
        items = [
            GovernanceService.proposal_view(p, now)
            for p in data.proposals.items
            if status is None or p.status == status
        ]
        return ProposalListResponse(
            total_count=data.proposals.total_count,
            active_count=data.proposals.active_count,
            items=items,
        )

    @staticmethod
    def proposal(data: AgoraData, proposal_id: str, now: Optional[datetime] = None) -> ProposalView:
        """Raises KeyError for an unknown id."""
        return GovernanceService.proposal_view(data.find_proposal(proposal_id), now)

    @staticmethod
    def dao_proposal_view(p: DaoProposal, data: AgoraData) -> DaoProposalView:
        durations = {t.tier: t.duration for t in data.dao_treasury.voting_tiers}
        return DaoProposalView(
            id=p.id,
            title=p.title,
            status=p.status,
            proposer=p.proposer,
            description=p.description,
            requested_amount=p.requested_amount,
            requested_amount_display=sol_amount(p.requested_amount),
            votes_yes=p.votes_yes,
            votes_no=p.votes_no,
            votes_abstain=p.votes_abstain,
            split=VoteSplitView(**vote_percentage_with_abstain(
                p.votes_yes, p.votes_no, p.votes_abstain)._asdict()),
            quorum=p.quorum,
            quorum_progress=quorum_progress_percent(p.total_votes, p.quorum),
            end_time=p.end_time,
            tier=p.tier,
            tier_duration=durations.get(p.tier),
        )

    @staticmethod
    def dao_proposals(data: AgoraData):
        return [GovernanceService.dao_proposal_view(p, data) for p in data.proposals.dao_proposals]

    @staticmethod
    def voting(data: AgoraData, now: Optional[datetime] = None) -> VotingResponse:
        v = data.voting
        return VotingResponse(
            user_voting_power=v.user_voting_power,
            pending_votes=v.pending_votes,
            total_votes_cast=v.total_votes_cast,
            next_deadline=v.next_deadline,
            time_remaining=_remaining(v.next_deadline, now),
        )


class SanctionService:
    @staticmethod
    def active_view(s: ActiveSanction, now: Optional[datetime] = None) -> ActiveSanctionView:
        return ActiveSanctionView(
            country_code=s.country_code,
            country_name=s.country_name,
            reason=s.reason,
            evidence_hash=s.evidence_hash,
            sanction_rate=s.sanction_rate,
            rate_percent=sanction_rate_to_percent(s.sanction_rate),
            imposed_at=s.imposed_at,
            expires_at=s.expires_at,
            time_remaining=_remaining(s.expires_at, now),
            votes_for=s.votes_for,
            votes_against=s.votes_against,
            approval_percent=vote_percentage(s.votes_for, s.votes_against),
            proposal_id=s.proposal_id,
        )

    @staticmethod
    def sanctions(data: AgoraData, now: Optional[datetime] = None) -> SanctionsResponse:
        book = data.sanctions
        return SanctionsResponse(
            active_count=book.active_count,
            historical_count=book.historical_count,
            active=[SanctionService.active_view(s, now) for s in book.active],
            historical=[
                HistoricalSanctionView(
                    country_code=h.country_code,
                    country_name=h.country_name,
                    reason=h.reason,
                    was_lifted=h.was_lifted,
                    lift_reason=h.lift_reason,
                    duration=h.duration,
                )
                for h in book.historical
            ],
        )


class ProtocolService:
    @staticmethod
    def stats(data: AgoraData) -> ProtocolStatsResponse:
        p = data.protocol
        display = {
            "total_users": compact_number(p.total_users),
            "daily_active_users": compact_number(p.daily_active_users),
            "total_ubi_claimed": compact_number(p.total_ubi_claimed),
            "total_supply": compact_number(p.total_supply),
            "circulating_supply": compact_number(p.circulating_supply),
            "base_transaction_fee": comma_number(p.base_transaction_fee),
            "treasury_fee_share": f"{comma_number(p.treasury_fee_share)}%",
            "burn_share": f"{comma_number(p.burn_share)}%",
        }
        return ProtocolStatsResponse(
            total_users=p.total_users,
            daily_active_users=p.daily_active_users,
            total_ubi_claimed=p.total_ubi_claimed,
            total_supply=p.total_supply,
            circulating_supply=p.circulating_supply,
            base_transaction_fee=p.base_transaction_fee,
            treasury_fee_share=p.treasury_fee_share,
            burn_share=p.burn_share,
            display=display,
        )
