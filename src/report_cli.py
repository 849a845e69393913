import argparse
import json
import logging
import os
import sys
from datetime import datetime

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import REPORTS_DIR, LOG_LEVEL, ensure_dirs  # noqa: E402
from src.data_store import build_agora_data, to_dict  # noqa: E402
from src.formatting import (  # noqa: E402
    compact_number, sol_amount, time_remaining, vote_percentage,
    vote_percentage_with_abstain, sanction_rate_to_percent, gas_pool_usage_percent,
)
from src.models import AgoraData  # noqa: E402
from src.observability import configure_logging  # noqa: E402

logger = logging.getLogger(__name__)


def render_summary(data: AgoraData, now: datetime) -> str:
    """Plain-text dashboard summary, one section per panel."""
    pool = data.gas_pool
    lines = [
        f"AGORA dashboard — {now:%Y-%m-%d %H:%M} UTC",
        "",
        "Gas pool",
        f"  Available   {sol_amount(pool.total_balance)}",
        f"  Used        {sol_amount(pool.used_balance)} "
        f"({gas_pool_usage_percent(pool.total_balance, pool.used_balance)}%)",
        f"  Subsidized  {compact_number(pool.subsidized_users)} users, "
        f"{pool.active_sponsors} sponsors",
        "",
        "Treasury",
        f"  DAO         {sol_amount(data.dao_treasury.sol_balance)}",
        f"  AGORA       {compact_number(data.treasury.agora_balance)} "
        f"(+{compact_number(data.treasury.inflow_last_30_days)} / "
        f"-{compact_number(data.treasury.outflow_last_30_days)} 30d)",
        "",
        f"Proposals ({data.proposals.active_count} active of {data.proposals.total_count})",
    ]
    for p in data.proposals.items:
        left = time_remaining(p.end_time, now).text if p.end_time else "not scheduled"
        lines.append(
            f"  {p.id:<7} {p.status:<7} {vote_percentage(p.votes_yes, p.votes_no):>3}% yes  "
            f"{left:<10} {p.title}"
        )
    for d in data.proposals.dao_proposals:
        split = vote_percentage_with_abstain(d.votes_yes, d.votes_no, d.votes_abstain)
        lines.append(
            f"  DAO-{d.id:<3} tier {d.tier}  {split.yes}/{split.no}/{split.abstain}  "
            f"{sol_amount(d.requested_amount):<10} {d.title}"
        )
    lines += ["", f"Sanctions ({data.sanctions.active_count} active)"]
    for s in data.sanctions.active:
        lines.append(
            f"  {s.country_code}  {sanction_rate_to_percent(s.sanction_rate):g}%  "
            f"expires in {time_remaining(s.expires_at, now).text}  {s.reason}"
        )
    proto = data.protocol
    lines += [
        "",
        "Protocol",
        f"  Users {compact_number(proto.total_users)}, "
        f"DAU {compact_number(proto.daily_active_users)}, "
        f"UBI claimed {compact_number(proto.total_ubi_claimed)}",
    ]
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print the AGORA dashboard summary")
    parser.add_argument("--json", action="store_true", help="Emit the raw snapshot as JSON")
    parser.add_argument("--output", help="Write the report to this file instead of stdout "
                                         "(relative paths land in reports/)")
    args = parser.parse_args(argv)

    configure_logging(LOG_LEVEL)

    try:
        data = build_agora_data()
        if args.json:
            report = json.dumps(to_dict(data), indent=2)
        else:
            report = render_summary(data, data.generated_at)

        if args.output:
            path = args.output
            if not os.path.isabs(path):
                ensure_dirs()
                path = os.path.join(REPORTS_DIR, path)
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(report + "\n")
            logger.info("Wrote report to %s", path)
        else:
            print(report)

    except Exception as e:
        logger.error("Report failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
