"""
Value records for the AGORA dashboard snapshot.

Every record is frozen: a snapshot is built once by ``src.data_store`` and
read by the formatter, the API and the Streamlit app without mutation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass(frozen=True)
class SponsorTier:
    name: str
    contribution_amount: float    # SOL
    monthly_limit: int            # subsidized transactions per month
    bonus_percent: float


@dataclass(frozen=True)
class Sponsor:
    name: str
    tier: str
    amount: float


@dataclass(frozen=True)
class GasPool:
    total_balance: float
    used_balance: float
    subsidized_users: int
    avg_monthly_usage: float
    active_sponsors: int
    tiers: Dict[str, SponsorTier] = field(default_factory=dict)
    sponsors: List[Sponsor] = field(default_factory=list)


@dataclass(frozen=True)
class VotingTier:
    """DAO approval tier (1-3): spending cap, voting duration and quorum."""
    tier: int
    max_amount: float             # inf for the top tier
    duration: str
    quorum: int


@dataclass(frozen=True)
class DaoTreasury:
    sol_balance: float
    total_spent: float
    total_voters: int
    voting_tiers: List[VotingTier] = field(default_factory=list)


@dataclass(frozen=True)
class TokenTreasury:
    agora_balance: float
    inflow_last_30_days: float
    outflow_last_30_days: float
    last_updated: datetime

    @property
    def net_flow_last_30_days(self) -> float:
        return self.inflow_last_30_days - self.outflow_last_30_days


@dataclass(frozen=True)
class Proposal:
    id: str
    title: str
    status: str
    type: str
    proposer: str
    description: str
    requested_amount: float
    votes_yes: int
    votes_no: int
    quorum: int
    end_time: Optional[datetime]
    created_at: datetime

    @property
    def total_votes(self) -> int:
        return self.votes_yes + self.votes_no


@dataclass(frozen=True)
class DaoProposal:
    """SOL spending proposal with a three-way vote split."""
    id: str
    title: str
    status: str
    proposer: str
    description: str
    requested_amount: float
    votes_yes: int
    votes_no: int
    votes_abstain: int
    quorum: int
    end_time: str                 # display duration, e.g. "3 days"
    tier: int

    @property
    def total_votes(self) -> int:
        return self.votes_yes + self.votes_no + self.votes_abstain


@dataclass(frozen=True)
class ProposalBook:
    total_count: int
    active_count: int
    items: List[Proposal] = field(default_factory=list)
    dao_proposals: List[DaoProposal] = field(default_factory=list)


@dataclass(frozen=True)
class VotingSummary:
    user_voting_power: int
    pending_votes: int
    total_votes_cast: int
    next_deadline: datetime


@dataclass(frozen=True)
class ActiveSanction:
    country_code: str
    country_name: str
    reason: str
    evidence_hash: str
    sanction_rate: int            # percent × 100
    imposed_at: datetime
    expires_at: datetime
    votes_for: int
    votes_against: int
    proposal_id: str              # not checked against the proposal list


@dataclass(frozen=True)
class HistoricalSanction:
    country_code: str
    country_name: str
    reason: str
    was_lifted: bool
    lift_reason: str
    duration: int                 # days


@dataclass(frozen=True)
class SanctionBook:
    active_count: int
    historical_count: int
    active: List[ActiveSanction] = field(default_factory=list)
    historical: List[HistoricalSanction] = field(default_factory=list)


@dataclass(frozen=True)
class ProtocolStats:
    total_users: int
    daily_active_users: int
    total_ubi_claimed: float
    total_supply: float
    circulating_supply: float
    base_transaction_fee: float
    treasury_fee_share: float
    burn_share: float


@dataclass(frozen=True)
class AgoraData:
    """Complete dashboard snapshot, anchored to ``generated_at``."""
    generated_at: datetime
    gas_pool: GasPool
    dao_treasury: DaoTreasury
    treasury: TokenTreasury
    proposals: ProposalBook
    voting: VotingSummary
    sanctions: SanctionBook
    protocol: ProtocolStats

    def find_proposal(self, proposal_id: str) -> Proposal:
        """Look up a proposal by id. Raises KeyError if absent."""
        for p in self.proposals.items:
            if p.id == proposal_id:
                return p
        raise KeyError(proposal_id)
