"""
Pydantic models for the AGORA Governance Dashboard API.
Every view carries the raw values plus the display strings the dashboard renders.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Optional, Any


class TimeRemainingView(BaseModel):
    expired: bool
    text: str


class VoteSplitView(BaseModel):
    yes: int = Field(..., ge=0, le=100)
    no: int = Field(..., ge=0, le=100)
    abstain: int = Field(..., ge=0, le=100)


# ─── Treasury ───

class SponsorTierView(BaseModel):
    name: str
    contribution_amount: float
    contribution_display: str
    monthly_limit: int
    monthly_limit_display: str
    bonus_percent: float
    bonus_amount: float


class SponsorView(BaseModel):
    name: str
    tier: str
    amount: float
    amount_display: str


class GasPoolResponse(BaseModel):
    """
    SOL gas pool funded by sponsors.
    usage_percent is used / (available + used).
    """
    total_balance: float
    total_balance_display: str
    used_balance: float
    used_balance_display: str
    usage_percent: int = Field(..., ge=0, le=100)
    subsidized_users: int
    subsidized_users_display: str
    avg_monthly_usage: float
    active_sponsors: int
    tiers: List[SponsorTierView]
    sponsors: List[SponsorView]


class VotingTierView(BaseModel):
    tier: int
    max_amount: Optional[float] = Field(None, description="Spending cap in SOL; null when unbounded.")
    duration: str
    quorum: int


class DaoTreasuryResponse(BaseModel):
    sol_balance: float
    sol_balance_display: str
    total_spent: float
    total_spent_display: str
    total_voters: int
    voting_tiers: List[VotingTierView]


class TokenTreasuryResponse(BaseModel):
    agora_balance: float
    agora_balance_display: str
    inflow_last_30_days: float
    inflow_display: str
    outflow_last_30_days: float
    outflow_display: str
    net_flow_last_30_days: float
    last_updated: datetime


# ─── Governance ───

class ProposalView(BaseModel):
    id: str
    title: str
    status: str
    type: str
    proposer: str
    description: str
    requested_amount: float
    requested_amount_display: str
    votes_yes: int
    votes_no: int
    yes_percent: int = Field(..., ge=0, le=100)
    quorum: int
    quorum_progress: int = Field(..., ge=0)
    approval_threshold_bps: int
    end_time: Optional[datetime] = None
    created_at: datetime
    time_remaining: Optional[TimeRemainingView] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "id": "AGP-45",
            "title": "Partner with Global NGO Network",
            "status": "voting",
            "type": "standard",
            "yes_percent": 84,
            "quorum_progress": 100,
        }
    })


class ProposalListResponse(BaseModel):
    total_count: int
    active_count: int
    items: List[ProposalView]


class DaoProposalView(BaseModel):
    id: str
    title: str
    status: str
    proposer: str
    description: str
    requested_amount: float
    requested_amount_display: str
    votes_yes: int
    votes_no: int
    votes_abstain: int
    split: VoteSplitView
    quorum: int
    quorum_progress: int = Field(..., ge=0)
    end_time: str
    tier: int
    tier_duration: Optional[str] = None


class VotingResponse(BaseModel):
    user_voting_power: int
    pending_votes: int
    total_votes_cast: int
    next_deadline: datetime
    time_remaining: TimeRemainingView


# ─── Sanctions ───

class ActiveSanctionView(BaseModel):
    country_code: str
    country_name: str
    reason: str
    evidence_hash: str
    sanction_rate: int
    rate_percent: float
    imposed_at: datetime
    expires_at: datetime
    time_remaining: TimeRemainingView
    votes_for: int
    votes_against: int
    approval_percent: int = Field(..., ge=0, le=100)
    proposal_id: str


class HistoricalSanctionView(BaseModel):
    country_code: str
    country_name: str
    reason: str
    was_lifted: bool
    lift_reason: str
    duration: int


class SanctionsResponse(BaseModel):
    active_count: int
    historical_count: int
    active: List[ActiveSanctionView]
    historical: List[HistoricalSanctionView]


# ─── Protocol ───

class ProtocolStatsResponse(BaseModel):
    total_users: int
    daily_active_users: int
    total_ubi_claimed: float
    total_supply: float
    circulating_supply: float
    base_transaction_fee: float
    treasury_fee_share: float
    burn_share: float
    display: Dict[str, str]


class SnapshotResponse(BaseModel):
    """Raw snapshot, field for field."""
    generated_at: datetime
    data: Dict[str, Any]
