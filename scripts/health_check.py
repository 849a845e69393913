"""
Health Check Script.
Verifies the snapshot builder, formatters and governance rules without
spinning up the API or UI.
"""

import sys
import os
from colorama import init, Fore, Style

# Add root to python path
PROJ_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJ_ROOT)

init(autoreset=True)

def check_step(name: str):
    print(f"{Fore.CYAN}➤ Checking: {name}...{Style.RESET_ALL}", end=" ")

def step_ok(msg: str = "OK"):
    print(f"{Fore.GREEN}✓ {msg}")

def step_fail(msg: str):
    print(f"{Fore.RED}✗ FAILED: {msg}")
    sys.exit(1)

def main():
    print(f"{Style.BRIGHT}Running AGORA Dashboard Health Check...{Style.RESET_ALL}\n")

    # 1. Output directory
    check_step("Reports Directory")
    try:
        from config import ensure_dirs, REPORTS_DIR
        ensure_dirs()
        if os.access(REPORTS_DIR, os.W_OK):
            step_ok()
        else:
            step_fail("Reports dir not writable")
    except Exception as e:
        step_fail(str(e))

    # 2. Snapshot
    check_step("Snapshot Build")
    try:
        from src.data_store import build_agora_data, to_dict
        data = build_agora_data()
        if not data.proposals.items:
            raise ValueError("Snapshot has no proposals")
        to_dict(data)
        step_ok(f"{len(data.proposals.items)} proposals, {len(data.sanctions.active)} sanctions")
    except Exception as e:
        step_fail(str(e))

    # 3. Formatters
    check_step("Formatters")
    try:
        from src.formatting import compact_number, gas_pool_usage_percent, vote_percentage
        if compact_number(1_000_000) != "1M":
            raise ValueError(f"compact_number(1e6) = {compact_number(1_000_000)!r}")
        if vote_percentage(75, 25) != 75:
            raise ValueError("vote_percentage(75, 25) != 75")
        usage = gas_pool_usage_percent(data.gas_pool.total_balance, data.gas_pool.used_balance)
        step_ok(f"Gas pool {usage}% used")
    except Exception as e:
        step_fail(str(e))

    # 4. Governance rules
    check_step("Governance Rules")
    try:
        from src.governance import calculate_quorum, dao_tier_for_amount
        for p in data.proposals.dao_proposals:
            tier = dao_tier_for_amount(p.requested_amount, data.dao_treasury.voting_tiers)
            if tier.tier != p.tier:
                raise ValueError(f"DAO proposal {p.id} listed as tier {p.tier}, amount implies {tier.tier}")
        quorum = calculate_quorum(data.protocol.total_users, "constitutional")
        step_ok(f"Constitutional quorum {quorum:,}")
    except Exception as e:
        step_fail(str(e))

    print(f"\n{Fore.GREEN}{Style.BRIGHT}ALL CHECKS PASSED.{Style.RESET_ALL}")

if __name__ == "__main__":
    main()
