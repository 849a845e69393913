"""
Configuration for the AGORA Governance Dashboard.
Mock protocol state, tier tables, governance constants, and operational defaults.

Currently static mock data.
TODO: Replace the mock tables with Solana RPC reads once the programs are on devnet.
"""

import os

# ──────────────────────────────────────────────
# Gas Pool (SOL) — sponsor-funded transaction subsidies
# ──────────────────────────────────────────────
GAS_POOL = {
    "total_balance":     7500,     # SOL available
    "used_balance":      2500,     # SOL used
    "subsidized_users":  75000,    # users benefiting
    "avg_monthly_usage": 150,      # SOL per month
    "active_sponsors":   50,
}

# Sponsor tiers: contribution (SOL), monthly subsidized tx limit, bonus %
SPONSOR_TIERS = {
    "bronze":   {"amount": 1,     "monthly_limit": 800,     "bonus": 20},   # 20% = 0.2 SOL
    "silver":   {"amount": 10,    "monthly_limit": 6000,    "bonus": 15},   # 15% = 1.5 SOL
    "gold":     {"amount": 100,   "monthly_limit": 40000,   "bonus": 10},   # 10% = 10 SOL
    "platinum": {"amount": 1000,  "monthly_limit": 200000,  "bonus": 5},    # 5% = 50 SOL
    "diamond":  {"amount": 10000, "monthly_limit": 1200000, "bonus": 3},    # 3% = 300 SOL
}

TOP_SPONSORS = [
    {"name": "Solana Foundation", "tier": "diamond",  "amount": 10000},
    {"name": "Anonymous Whale",   "tier": "platinum", "amount": 1000},
    {"name": "CryptoForGood DAO", "tier": "gold",     "amount": 100},
    {"name": "DeFi Alliance",     "tier": "gold",     "amount": 100},
]

# ──────────────────────────────────────────────
# DAO Treasury (SOL)
# ──────────────────────────────────────────────
DAO_TREASURY = {
    "sol_balance":  120.0,
    "total_spent":  0.0,           # all-time SOL spent
    "total_voters": 60,            # funding contributors
}

# Approval tiers for DAO spending, selected by requested amount
DAO_VOTING_TIERS = {
    1: {"max_amount": 1,            "duration": "24h",    "quorum": 20},
    2: {"max_amount": 10,           "duration": "3 days", "quorum": 30},
    3: {"max_amount": float("inf"), "duration": "7 days", "quorum": 50},
}

# ──────────────────────────────────────────────
# AGORA Token Treasury
# ──────────────────────────────────────────────
TOKEN_TREASURY = {
    "agora_balance":        2400000,
    "inflow_last_30_days":  124500,
    "outflow_last_30_days": 50000,
}

# ──────────────────────────────────────────────
# Proposals
# Offsets are in days relative to snapshot time.
# ──────────────────────────────────────────────
PROPOSAL_TOTAL_COUNT  = 47
PROPOSAL_ACTIVE_COUNT = 3

PROPOSALS = [
    {
        "id": "AGP-47",
        "title": "Fund Mobile App Development",
        "status": "voting",
        "type": "treasury",
        "proposer": "7xKXtg...2nP9",
        "description": "Allocate 500,000 AGORA for mobile app development to increase accessibility.",
        "requested_amount": 500000,
        "votes_yes": 12450,
        "votes_no": 6230,
        "quorum": 15000,
        "ends_in_days": 3,
        "created_days_ago": 4,
    },
    {
        "id": "AGP-46",
        "title": "Increase Daily UBI to 110 AGORA",
        "status": "review",
        "type": "constitutional",
        "proposer": "3mNxPq...8kL2",
        "description": "Proposal to increase daily UBI from 100 to 110 AGORA tokens.",
        "requested_amount": 0,
        "votes_yes": 0,
        "votes_no": 0,
        "quorum": 25000,
        "ends_in_days": None,      # not yet scheduled
        "created_days_ago": 1,
    },
    {
        "id": "AGP-45",
        "title": "Partner with Global NGO Network",
        "status": "voting",
        "type": "standard",
        "proposer": "9pQrSt...4mN7",
        "description": "Establish partnership with NGO network for wider UBI distribution.",
        "requested_amount": 0,
        "votes_yes": 8400,
        "votes_no": 1600,
        "quorum": 10000,
        "ends_in_days": 5,
        "created_days_ago": 2,
    },
]

# SOL spending proposals against the DAO treasury
DAO_PROPOSALS = [
    {
        "id": "001",
        "title": "Fund RPC Infrastructure (Q1 2025)",
        "status": "voting",
        "proposer": "@alice",
        "description": "Fund Helius RPC service for 3 months to ensure reliable blockchain access for all users.",
        "requested_amount": 5.0,
        "votes_yes": 41,
        "votes_no": 13,
        "votes_abstain": 6,
        "quorum": 30,
        "end_time": "3 days",
        "tier": 2,
    },
    {
        "id": "002",
        "title": "Security Audit by OtterSec",
        "status": "voting",
        "proposer": "@bob",
        "description": "Comprehensive security audit of smart contracts before mainnet launch.",
        "requested_amount": 25.0,
        "votes_yes": 38,
        "votes_no": 8,
        "votes_abstain": 4,
        "quorum": 50,
        "end_time": "5 days",
        "tier": 3,
    },
]

# ──────────────────────────────────────────────
# Voting
# ──────────────────────────────────────────────
VOTING = {
    "user_voting_power":   1,
    "pending_votes":       2,
    "total_votes_cast":    23,
    "next_deadline_days":  3,
}

# ──────────────────────────────────────────────
# Sanctions
# sanction_rate is percent × 100 (1000 → 10%)
# ──────────────────────────────────────────────
SANCTION_ACTIVE_COUNT     = 2
SANCTION_HISTORICAL_COUNT = 5

ACTIVE_SANCTIONS = [
    {
        "country_code": "XYZ",
        "country_name": "Example Country",
        "reason": "Human rights violations",
        "evidence_hash": "QmX7b3...ipfs",
        "sanction_rate": 1000,
        "imposed_days_ago": 30,
        "expires_in_days": 47,
        "votes_for": 45000,
        "votes_against": 12000,
        "proposal_id": "AGP-38",
    },
    {
        "country_code": "ABC",
        "country_name": "Another Country",
        "reason": "Genocide",
        "evidence_hash": "QmY8c4...ipfs",
        "sanction_rate": 500,
        "imposed_days_ago": 60,
        "expires_in_days": 120,
        "votes_for": 52000,
        "votes_against": 8000,
        "proposal_id": "AGP-32",
    },
]

HISTORICAL_SANCTIONS = [
    {
        "country_code": "DEF",
        "country_name": "Reformed Country",
        "reason": "Political persecution",
        "was_lifted": True,
        "lift_reason": "Democratic reforms implemented",
        "duration": 90,            # days
    },
]

# ──────────────────────────────────────────────
# Protocol Stats
# ──────────────────────────────────────────────
PROTOCOL_STATS = {
    "total_users":          142500,
    "daily_active_users":   89000,
    "total_ubi_claimed":    1250000000,
    "total_supply":         5200000000,
    "circulating_supply":   4800000000,
    "base_transaction_fee": 116,
    "treasury_fee_share":   50,
    "burn_share":           50,
}

# ──────────────────────────────────────────────
# Governance Rules (mirrors the on-chain governance program)
# ──────────────────────────────────────────────
PROPOSAL_TYPES = ("standard", "treasury", "constitutional", "sanction")

# Dynamic quorum: max(minimum, total_users * pct_bps / 10000)
QUORUM_RULES = {
    "standard":       {"pct_bps": 100,  "minimum": 10_000},    # 1%
    "treasury":       {"pct_bps": 200,  "minimum": 20_000},    # 2%
    "sanction":       {"pct_bps": 500,  "minimum": 50_000},    # 5%
    "constitutional": {"pct_bps": 1000, "minimum": 100_000},   # 10%
}

# Approval thresholds in basis points of yes / (yes + no)
APPROVAL_THRESHOLDS_BPS = {
    "standard":       5001,        # >50%
    "treasury":       5001,
    "sanction":       6700,        # >67%
    "constitutional": 7500,        # >75%
}

VOTING_PERIOD_DAYS = {
    "standard":       3,
    "treasury":       7,
    "constitutional": 14,
    "sanction":       14,
}

# Reputation deltas on finalization
REP_PROPOSAL_PASSED   = 2
REP_PROPOSAL_REJECTED = 1
REP_NO_QUORUM_50      = -1         # expired with >= 50% of quorum
REP_NO_QUORUM_25      = -2         # expired with 25-50% of quorum
REP_NO_QUORUM_LOW     = -3         # expired with < 25% of quorum (spam)
QUORUM_THRESHOLD_50_BPS = 5000
QUORUM_THRESHOLD_25_BPS = 2500

# ──────────────────────────────────────────────
# Runtime
# ──────────────────────────────────────────────
LOG_LEVEL     = os.environ.get("AGORA_LOG_LEVEL", "INFO").upper()
METRICS_PORT  = int(os.environ.get("AGORA_METRICS_PORT", "9100"))

# ──────────────────────────────────────────────
# Paths
# ──────────────────────────────────────────────
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
REPORTS_DIR  = os.path.join(PROJECT_ROOT, "reports")


def ensure_dirs():
    """Create output directories if they don't exist. Call lazily, not at import."""
    for d in [REPORTS_DIR]:
        os.makedirs(d, exist_ok=True)


# ──────────────────────────────────────────────
# Display
# ──────────────────────────────────────────────
STATUS_COLORS = {
    "voting":   "#00bbf9",   # blue
    "review":   "#ffa726",   # amber
    "passed":   "#00c853",   # green
    "rejected": "#ef5350",   # red
    "expired":  "#9e9e9e",   # grey
}

TIER_COLORS = {
    "bronze":   "#cd7f32",
    "silver":   "#c0c0c0",
    "gold":     "#ffd700",
    "platinum": "#e5e4e2",
    "diamond":  "#b9f2ff",
}

VOTE_COLORS = {
    "yes":     "#00c853",
    "no":      "#ef5350",
    "abstain": "#9e9e9e",
}
