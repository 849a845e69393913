"""
Data Store — builds the dashboard snapshot from the mock tables in config.py.

The snapshot is an explicit ``AgoraData`` value passed to the formatter,
API and UI layers. Relative timestamps in the mock tables are anchored to
the ``now`` given to ``build_agora_data``; a live chain reader would return
the same shapes.
"""

import logging
import math
import time
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from config import (
    GAS_POOL, SPONSOR_TIERS, TOP_SPONSORS,
    DAO_TREASURY, DAO_VOTING_TIERS, TOKEN_TREASURY,
    PROPOSAL_TOTAL_COUNT, PROPOSAL_ACTIVE_COUNT, PROPOSALS, DAO_PROPOSALS,
    VOTING,
    SANCTION_ACTIVE_COUNT, SANCTION_HISTORICAL_COUNT,
    ACTIVE_SANCTIONS, HISTORICAL_SANCTIONS,
    PROTOCOL_STATS,
)
from src.formatting import gas_pool_usage_percent
from src.models import (
    AgoraData, GasPool, SponsorTier, Sponsor, DaoTreasury, VotingTier,
    TokenTreasury, Proposal, DaoProposal, ProposalBook, VotingSummary,
    ActiveSanction, HistoricalSanction, SanctionBook, ProtocolStats,
)
from src.observability import (
    SNAPSHOT_BUILD_DURATION, SNAPSHOT_BUILDS_TOTAL, GAS_POOL_USAGE_PERCENT,
)

logger = logging.getLogger(__name__)


def _days(n: Optional[float], now: datetime) -> Optional[datetime]:
    if n is None:
        return None
    return now + timedelta(days=n)


def _build_gas_pool() -> GasPool:
    tiers = {
        name: SponsorTier(
            name=name,
            contribution_amount=t["amount"],
            monthly_limit=t["monthly_limit"],
            bonus_percent=t["bonus"],
        )
        for name, t in SPONSOR_TIERS.items()
    }
    sponsors = [Sponsor(**s) for s in TOP_SPONSORS]
    return GasPool(tiers=tiers, sponsors=sponsors, **GAS_POOL)


def _build_dao_treasury() -> DaoTreasury:
    voting_tiers = [
        VotingTier(tier=tier, **params)
        for tier, params in sorted(DAO_VOTING_TIERS.items())
    ]
    return DaoTreasury(voting_tiers=voting_tiers, **DAO_TREASURY)


def _build_proposals(now: datetime) -> ProposalBook:
    items = []
    for raw in PROPOSALS:
        fields = {k: v for k, v in raw.items()
                  if k not in ("ends_in_days", "created_days_ago")}
        items.append(Proposal(
            end_time=_days(raw["ends_in_days"], now),
            created_at=_days(-raw["created_days_ago"], now),
            **fields,
        ))
    dao_proposals = [DaoProposal(**raw) for raw in DAO_PROPOSALS]
    return ProposalBook(
        total_count=PROPOSAL_TOTAL_COUNT,
        active_count=PROPOSAL_ACTIVE_COUNT,
        items=items,
        dao_proposals=dao_proposals,
    )


def _build_sanctions(now: datetime) -> SanctionBook:
    active = []
    for raw in ACTIVE_SANCTIONS:
        fields = {k: v for k, v in raw.items()
                  if k not in ("imposed_days_ago", "expires_in_days")}
        active.append(ActiveSanction(
            imposed_at=_days(-raw["imposed_days_ago"], now),
            expires_at=_days(raw["expires_in_days"], now),
            **fields,
        ))
    historical = [HistoricalSanction(**raw) for raw in HISTORICAL_SANCTIONS]
    return SanctionBook(
        active_count=SANCTION_ACTIVE_COUNT,
        historical_count=SANCTION_HISTORICAL_COUNT,
        active=active,
        historical=historical,
    )


def build_agora_data(now: Optional[datetime] = None) -> AgoraData:
    """
    Build a complete dashboard snapshot.

    Parameters
    ----------
    now : datetime — anchor for every relative timestamp. Naive values are
          taken as UTC. Defaults to the current UTC time.

    Returns
    -------
    AgoraData, frozen.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    start = time.perf_counter()
    data = AgoraData(
        generated_at=now,
        gas_pool=_build_gas_pool(),
        dao_treasury=_build_dao_treasury(),
        treasury=TokenTreasury(last_updated=now, **TOKEN_TREASURY),
        proposals=_build_proposals(now),
        voting=VotingSummary(
            user_voting_power=VOTING["user_voting_power"],
            pending_votes=VOTING["pending_votes"],
            total_votes_cast=VOTING["total_votes_cast"],
            next_deadline=_days(VOTING["next_deadline_days"], now),
        ),
        sanctions=_build_sanctions(now),
        protocol=ProtocolStats(**PROTOCOL_STATS),
    )
    SNAPSHOT_BUILD_DURATION.observe(time.perf_counter() - start)
    SNAPSHOT_BUILDS_TOTAL.inc()

    usage = gas_pool_usage_percent(data.gas_pool.total_balance, data.gas_pool.used_balance)
    GAS_POOL_USAGE_PERCENT.set(usage)
    logger.info("Built AGORA snapshot at %s (%d proposals, %d active sanctions)",
                now.isoformat(), len(data.proposals.items), len(data.sanctions.active))
    return data


@lru_cache(maxsize=1)
def get_agora_data() -> AgoraData:
    """Process-wide snapshot, built once on first access."""
    return build_agora_data()


def reset_agora_data():
    """Drop the cached snapshot so the next access rebuilds it."""
    get_agora_data.cache_clear()


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, float) and math.isinf(value):
        return None
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def to_dict(data: AgoraData) -> Dict[str, Any]:
    """
    JSON-friendly dict of a snapshot.
    Datetimes become ISO-8601 strings; the unbounded top voting tier's
    ``max_amount`` becomes None.
    """
    return _jsonable(asdict(data))
