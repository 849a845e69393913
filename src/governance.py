"""
Governance Rules — quorum and approval thresholds, tier lookups, proposal outcomes.

Mirrors the on-chain governance program so the dashboard can show what a
proposal needs and how it would resolve. Thresholds live in config.py.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, List, Optional

from config import (
    PROPOSAL_TYPES, QUORUM_RULES, APPROVAL_THRESHOLDS_BPS, VOTING_PERIOD_DAYS,
    REP_PROPOSAL_PASSED, REP_PROPOSAL_REJECTED,
    REP_NO_QUORUM_50, REP_NO_QUORUM_25, REP_NO_QUORUM_LOW,
    QUORUM_THRESHOLD_50_BPS, QUORUM_THRESHOLD_25_BPS,
)
from src.formatting import round_half_away
from src.models import SponsorTier, VotingTier

BPS = 10_000


@dataclass(frozen=True)
class Outcome:
    status: str                   # passed | rejected | expired
    quorum_reached: bool
    approval_bps: int
    reputation_change: int
    bond_returned: bool


def _check_type(proposal_type: str) -> str:
    if proposal_type not in PROPOSAL_TYPES:
        raise ValueError(
            f"Unknown proposal type '{proposal_type}'. "
            f"Expected one of: {', '.join(PROPOSAL_TYPES)}"
        )
    return proposal_type


def dao_tier_for_amount(requested_amount: float, voting_tiers: List[VotingTier]) -> VotingTier:
    """Smallest DAO approval tier whose spending cap covers the amount."""
    for tier in sorted(voting_tiers, key=lambda t: t.tier):
        if requested_amount <= tier.max_amount:
            return tier
    raise ValueError(f"No voting tier covers {requested_amount} SOL")


def sponsor_tier_for_amount(
    total_contributed: float,
    tiers: Dict[str, SponsorTier],
) -> Optional[str]:
    """Highest sponsor tier reached by a cumulative contribution, or None below bronze."""
    reached = None
    for tier in sorted(tiers.values(), key=lambda t: t.contribution_amount):
        if total_contributed >= tier.contribution_amount:
            reached = tier.name
    return reached


def sponsor_bonus_amount(tier: SponsorTier) -> float:
    """Bonus SOL credited for a tier's contribution (bronze: 20% of 1 SOL = 0.2)."""
    return tier.contribution_amount * tier.bonus_percent / 100


def calculate_quorum(total_users: int, proposal_type: str) -> int:
    """
    Votes required for a proposal to count.

    ``max(minimum, total_users * pct_bps / 10000)``: the minimum holds until
    the protocol grows past it, with no upper cap.
    """
    rule = QUORUM_RULES[_check_type(proposal_type)]
    return max(rule["minimum"], total_users * rule["pct_bps"] // BPS)


def approval_threshold_bps(proposal_type: str) -> int:
    return APPROVAL_THRESHOLDS_BPS[_check_type(proposal_type)]


def voting_period(proposal_type: str) -> timedelta:
    return timedelta(days=VOTING_PERIOD_DAYS[_check_type(proposal_type)])


def approval_bps(votes_yes: int, votes_no: int) -> int:
    """Yes share in basis points, truncated; abstentions are not counted."""
    total = votes_yes + votes_no
    if total == 0:
        return 0
    return votes_yes * BPS // total


def quorum_progress_percent(votes: float, quorum: float) -> int:
    """Participation as a percentage of quorum; may exceed 100."""
    if quorum <= 0:
        return 0
    return round_half_away(votes / quorum * 100)


def proposal_outcome(
    votes_yes: int,
    votes_no: int,
    quorum_required: int,
    proposal_type: str,
) -> Outcome:
    """
    Resolve a finished vote.

    Quorum reached: passed (+2) or rejected (+1), bond returned either way.
    Quorum missed: expired, bond kept, and the proposer loses 1, 2 or 3
    reputation for reaching at least 50%, at least 25%, or under 25% of quorum.
    """
    threshold = approval_threshold_bps(proposal_type)
    total = votes_yes + votes_no
    approval = approval_bps(votes_yes, votes_no)

    if total >= quorum_required:
        if approval >= threshold:
            return Outcome("passed", True, approval, REP_PROPOSAL_PASSED, True)
        return Outcome("rejected", True, approval, REP_PROPOSAL_REJECTED, True)

    quorum_bps = total * BPS // quorum_required
    if quorum_bps >= QUORUM_THRESHOLD_50_BPS:
        rep = REP_NO_QUORUM_50
    elif quorum_bps >= QUORUM_THRESHOLD_25_BPS:
        rep = REP_NO_QUORUM_25
    else:
        rep = REP_NO_QUORUM_LOW
    return Outcome("expired", False, approval, rep, False)
