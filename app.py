"""
AGORA Governance Dashboard
━━━━━━━━━━━━━━━━━━━━━━━━━━
A Streamlit dashboard for the AGORA protocol treasury, proposals and sanctions.
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
import os
import sys
import json
import logging
import html as html_mod
from datetime import datetime, timezone

# ── Path setup ──
ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, ROOT)

from config import STATUS_COLORS, TIER_COLORS, VOTE_COLORS, PROPOSAL_TYPES
from src.data_store import get_agora_data, reset_agora_data, to_dict
from src.formatting import (
    compact_number, comma_number, sol_amount, time_remaining,
    vote_percentage, vote_percentage_with_abstain,
    sanction_rate_to_percent, gas_pool_usage_percent,
)
from src.governance import (
    calculate_quorum, approval_threshold_bps, voting_period,
    proposal_outcome, quorum_progress_percent, sponsor_bonus_amount,
    sponsor_tier_for_amount,
)

logger = logging.getLogger(__name__)

# Configure root logger so all modules' log messages are emitted
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


# ══════════════════════════════════════════════════════════════════
# HELPERS
# ══════════════════════════════════════════════════════════════════

def render_metric_card(label: str, value: str, delta: str = "", delta_type: str = "") -> str:
    """
    Generate HTML for a metric card.
    HTML-escapes inputs since proposal and sanction text is user-submitted.
    """
    label = html_mod.escape(str(label))
    value = html_mod.escape(str(value))
    delta = html_mod.escape(str(delta)) if delta else ""

    delta_html = ""
    if delta:
        delta_class = f"delta-{delta_type}" if delta_type else "delta"
        delta_html = f'<div class="delta {delta_class}">{delta}</div>'

    return f"""
    <div class="metric-card">
        <div class="label">{label}</div>
        <div class="value">{value}</div>
        {delta_html}
    </div>
    """


def render_status_badge(status: str) -> str:
    color = STATUS_COLORS.get(status, "#888")
    return (f'<span class="status-badge" style="background:{color};">'
            f'{html_mod.escape(status.upper())}</span>')


def _get_plotly_dark_layout(**overrides) -> dict:
    """Return common Plotly layout kwargs for dark theme."""
    base = dict(
        plot_bgcolor='rgba(0,0,0,0)',
        paper_bgcolor='rgba(0,0,0,0)',
        font=dict(color='#ccc', family='Inter'),
        margin=dict(l=10, r=10, t=50, b=30),
        xaxis=dict(gridcolor='rgba(255,255,255,0.05)'),
        yaxis=dict(gridcolor='rgba(255,255,255,0.05)'),
    )
    base.update(overrides)
    return base


def _vote_bar(yes: int, no: int, abstain: int = 0, height: int = 60) -> go.Figure:
    """Single horizontal stacked bar of a vote split."""
    fig = go.Figure()
    for label, val in (("yes", yes), ("no", no), ("abstain", abstain)):
        if val == 0 and label == "abstain":
            continue
        fig.add_trace(go.Bar(
            x=[val], y=[""], orientation='h', name=label.title(),
            marker_color=VOTE_COLORS[label],
            hovertemplate=f'{label.title()}: %{{x:,}}<extra></extra>',
        ))
    fig.update_layout(**_get_plotly_dark_layout(
        barmode='stack', height=height, showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(visible=False), yaxis=dict(visible=False),
    ))
    return fig


# ══════════════════════════════════════════════════════════════════
# PAGE CONFIG & THEME
# ══════════════════════════════════════════════════════════════════
st.set_page_config(
    page_title="AGORA Governance Dashboard",
    page_icon="🏛️",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700;800;900&display=swap');

    .stApp {
        font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
    }

    /* ── Header ── */
    .dashboard-header {
        background: linear-gradient(135deg, #0f0c29 0%, #302b63 50%, #24243e 100%);
        padding: 2rem 2.5rem;
        border-radius: 16px;
        margin-bottom: 1.5rem;
        border: 1px solid rgba(255,255,255,0.08);
    }
    .dashboard-header h1 {
        font-size: 2rem;
        font-weight: 800;
        margin: 0;
        background: linear-gradient(135deg, #00f5d4, #00bbf9, #9b5de5);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
    }
    .dashboard-header p {
        color: rgba(255,255,255,0.6);
        font-size: 0.95rem;
        margin: 0.3rem 0 0 0;
    }

    /* ── Metric Cards ── */
    .metric-card {
        background: linear-gradient(145deg, #1a1a2e 0%, #16213e 100%);
        border: 1px solid rgba(255,255,255,0.06);
        border-radius: 14px;
        padding: 1.3rem 1.5rem;
        text-align: center;
    }
    .metric-card .label {
        color: rgba(255,255,255,0.5);
        font-size: 0.75rem;
        text-transform: uppercase;
        letter-spacing: 1px;
        font-weight: 600;
        margin-bottom: 0.3rem;
    }
    .metric-card .value {
        color: #ffffff;
        font-size: 1.8rem;
        font-weight: 700;
        line-height: 1.2;
    }
    .metric-card .delta {
        font-size: 0.85rem;
        margin-top: 0.2rem;
        font-weight: 500;
    }
    .delta-positive { color: #00c853; }
    .delta-negative { color: #ef5350; }

    /* ── Status Badges ── */
    .status-badge {
        color: #000;
        padding: 3px 12px;
        border-radius: 20px;
        font-weight: 700;
        font-size: 0.75rem;
        letter-spacing: 0.5px;
        display: inline-block;
    }

    /* ── Section Headers ── */
    .section-header {
        font-size: 1.1rem;
        font-weight: 700;
        color: #e0e0e0;
        padding: 0.8rem 0 0.5rem 0;
        border-bottom: 2px solid rgba(155, 93, 229, 0.3);
        margin-bottom: 1rem;
    }

    [data-testid="stSidebar"] {
        background: linear-gradient(180deg, #0f0c29 0%, #1a1a2e 100%);
    }
</style>
""", unsafe_allow_html=True)


# ══════════════════════════════════════════════════════════════════
# SIDEBAR CONTROLS
# ══════════════════════════════════════════════════════════════════
with st.sidebar:
    st.markdown("### ⚙️ Dashboard Controls")
    st.markdown("---")

    status_filter = st.multiselect(
        "Proposal Status",
        list(STATUS_COLORS.keys()),
        default=["voting", "review"],
    )

    st.markdown("---")
    st.markdown("### 🧮 Quorum Calculator")
    calc_type = st.selectbox("Proposal Type", list(PROPOSAL_TYPES))
    calc_users = st.number_input("Registered Users", min_value=0, value=142500, step=1000)

    st.markdown("---")
    refresh_data = st.button("🔄 Rebuild Snapshot", use_container_width=True)

    st.markdown("---")
    st.caption("Static mock data, on-chain reads not wired yet")


# ══════════════════════════════════════════════════════════════════
# DATA LOADING
# ══════════════════════════════════════════════════════════════════
if refresh_data:
    reset_agora_data()

try:
    data = get_agora_data()
except Exception as e:
    st.error(f"⚠️ Failed to build dashboard snapshot: {str(e)}")
    st.stop()

now = datetime.now(timezone.utc)
pool = data.gas_pool


# ══════════════════════════════════════════════════════════════════
# HEADER
# ══════════════════════════════════════════════════════════════════
st.markdown("""
<div class="dashboard-header">
    <h1>🏛️ AGORA Governance</h1>
    <p>Gas pool • DAO treasury • Proposals • Sanctions</p>
</div>
""", unsafe_allow_html=True)


# ══════════════════════════════════════════════════════════════════
# KPI STRIP
# ══════════════════════════════════════════════════════════════════
net_flow = data.treasury.net_flow_last_30_days
cols = st.columns(5)
kpi_data = [
    ("GAS POOL", sol_amount(pool.total_balance),
     f"{gas_pool_usage_percent(pool.total_balance, pool.used_balance)}% used", ""),
    ("DAO TREASURY", sol_amount(data.dao_treasury.sol_balance), "", ""),
    ("AGORA TREASURY", compact_number(data.treasury.agora_balance),
     f"{'+' if net_flow >= 0 else ''}{compact_number(net_flow)} 30d",
     "positive" if net_flow >= 0 else "negative"),
    ("ACTIVE PROPOSALS", str(data.proposals.active_count),
     f"of {data.proposals.total_count}", ""),
    ("USERS", compact_number(data.protocol.total_users),
     f"{compact_number(data.protocol.daily_active_users)} daily", "positive"),
]

for col, (label, value, delta, delta_type) in zip(cols, kpi_data):
    col.markdown(render_metric_card(label, value, delta, delta_type), unsafe_allow_html=True)


# ══════════════════════════════════════════════════════════════════
# TABS
# ══════════════════════════════════════════════════════════════════
tab_treasury, tab_proposals, tab_sanctions, tab_protocol, tab_export = st.tabs([
    "💰 Treasury", "🗳️ Proposals", "⚖️ Sanctions", "📊 Protocol", "📥 Export"
])


# ══════════════════════════════════════════════════════════════════
# TAB 1: TREASURY
# ══════════════════════════════════════════════════════════════════
with tab_treasury:
    st.markdown('<div class="section-header">SOL Gas Pool</div>', unsafe_allow_html=True)

    col_chart, col_table = st.columns([1, 1.2])

    with col_chart:
        fig = go.Figure(go.Pie(
            labels=["Available", "Used"],
            values=[pool.total_balance, pool.used_balance],
            hole=0.6,
            marker=dict(colors=["#00bbf9", "#9b5de5"]),
            hovertemplate='%{label}: %{value:,} SOL<extra></extra>',
        ))
        fig.update_layout(**_get_plotly_dark_layout(
            title=dict(text="Gas Pool Balance", font=dict(size=16, color='#e0e0e0')),
            height=350,
            annotations=[dict(
                text=f"{gas_pool_usage_percent(pool.total_balance, pool.used_balance)}%<br>used",
                showarrow=False, font=dict(size=20, color='#fff'),
            )],
        ))
        st.plotly_chart(fig, use_container_width=True)
        st.caption(f"{compact_number(pool.subsidized_users)} subsidized users • "
                   f"{sol_amount(pool.avg_monthly_usage)} / month")

    with col_table:
        tier_df = pd.DataFrame([
            {
                "Tier": t.name.title(),
                "Contribution": sol_amount(t.contribution_amount),
                "Monthly Tx Limit": compact_number(t.monthly_limit),
                "Bonus": f"{comma_number(t.bonus_percent)}% ({sol_amount(sponsor_bonus_amount(t))})",
            }
            for t in pool.tiers.values()
        ])
        st.markdown("**Sponsor Tiers**")
        st.dataframe(tier_df, use_container_width=True, hide_index=True)

        sponsor_df = pd.DataFrame([
            {"Sponsor": s.name, "Tier": s.tier.title(), "Amount": sol_amount(s.amount)}
            for s in pool.sponsors
        ])
        st.markdown(f"**Top Sponsors** ({pool.active_sponsors} active)")
        st.dataframe(sponsor_df, use_container_width=True, hide_index=True)

    with st.expander("Which tier would a contribution reach?"):
        contribution = st.number_input("Total contribution (SOL)", min_value=0.0, value=25.0, step=1.0)
        reached = sponsor_tier_for_amount(contribution, pool.tiers)
        if reached:
            st.markdown(f"Reaches **{reached.title()}**")
        else:
            st.markdown("Below the bronze threshold")

    st.markdown('<div class="section-header">DAO Treasury</div>', unsafe_allow_html=True)
    c1, c2, c3 = st.columns(3)
    c1.metric("Balance", sol_amount(data.dao_treasury.sol_balance))
    c2.metric("All-time Spent", sol_amount(data.dao_treasury.total_spent))
    c3.metric("Funding Voters", comma_number(data.dao_treasury.total_voters))

    tiers_df = pd.DataFrame([
        {
            "Tier": t.tier,
            "Max Request": "Unlimited" if t.max_amount == float("inf") else sol_amount(t.max_amount),
            "Voting Period": t.duration,
            "Quorum": f"{t.quorum}%",
        }
        for t in data.dao_treasury.voting_tiers
    ])
    st.dataframe(tiers_df, use_container_width=True, hide_index=True)


# ══════════════════════════════════════════════════════════════════
# TAB 2: PROPOSALS
# ══════════════════════════════════════════════════════════════════
with tab_proposals:
    st.markdown('<div class="section-header">Protocol Proposals</div>', unsafe_allow_html=True)

    shown = [p for p in data.proposals.items if not status_filter or p.status in status_filter]
    if not shown:
        st.info("No proposals match the selected status.")

    for p in shown:
        with st.container(border=True):
            head_col, time_col = st.columns([4, 1])
            head_col.markdown(
                f"{render_status_badge(p.status)} &nbsp; **{html_mod.escape(p.id)}** — "
                f"{html_mod.escape(p.title)}",
                unsafe_allow_html=True,
            )
            if p.end_time:
                left = time_remaining(p.end_time, now)
                time_col.markdown(f"⏱️ {left.text}" if not left.expired else "⏹️ Ended")
            else:
                time_col.markdown("📝 In review")

            st.caption(f"{p.type.title()} • by {p.proposer}")
            st.write(p.description)

            if p.total_votes:
                st.plotly_chart(_vote_bar(p.votes_yes, p.votes_no), use_container_width=True,
                                key=f"votes-{p.id}")
            m1, m2, m3 = st.columns(3)
            m1.metric("Yes", f"{vote_percentage(p.votes_yes, p.votes_no)}%",
                      f"{compact_number(p.votes_yes)} votes")
            m2.metric("Quorum", f"{quorum_progress_percent(p.total_votes, p.quorum)}%",
                      f"of {compact_number(p.quorum)}")
            m3.metric("Needs", f"{approval_threshold_bps(p.type) / 100:g}%",
                      f"{voting_period(p.type).days}-day vote")

    st.markdown('<div class="section-header">DAO Spending Proposals</div>', unsafe_allow_html=True)
    for d in data.proposals.dao_proposals:
        split = vote_percentage_with_abstain(d.votes_yes, d.votes_no, d.votes_abstain)
        with st.container(border=True):
            st.markdown(
                f"{render_status_badge(d.status)} &nbsp; **#{html_mod.escape(d.id)}** — "
                f"{html_mod.escape(d.title)} &nbsp; `{sol_amount(d.requested_amount)}`",
                unsafe_allow_html=True,
            )
            st.caption(f"Tier {d.tier} • by {d.proposer} • ends in {d.end_time}")
            st.write(d.description)
            st.plotly_chart(_vote_bar(d.votes_yes, d.votes_no, d.votes_abstain),
                            use_container_width=True, key=f"dao-votes-{d.id}")
            st.markdown(f"Yes **{split.yes}%** • No **{split.no}%** • Abstain **{split.abstain}%** "
                        f"• Quorum {quorum_progress_percent(d.total_votes, d.quorum)}%")

    st.markdown('<div class="section-header">Your Voting</div>', unsafe_allow_html=True)
    v = data.voting
    v1, v2, v3, v4 = st.columns(4)
    v1.metric("Voting Power", comma_number(v.user_voting_power))
    v2.metric("Pending Votes", comma_number(v.pending_votes))
    v3.metric("Votes Cast", comma_number(v.total_votes_cast))
    v4.metric("Next Deadline", time_remaining(v.next_deadline, now).text)


# ══════════════════════════════════════════════════════════════════
# TAB 3: SANCTIONS
# ══════════════════════════════════════════════════════════════════
with tab_sanctions:
    st.markdown(
        f'<div class="section-header">Active Sanctions ({data.sanctions.active_count})</div>',
        unsafe_allow_html=True,
    )
    active_df = pd.DataFrame([
        {
            "Country": f"{s.country_name} ({s.country_code})",
            "Reason": s.reason,
            "UBI Reduction": f"{sanction_rate_to_percent(s.sanction_rate):g}%",
            "Expires In": time_remaining(s.expires_at, now).text,
            "Approval": f"{vote_percentage(s.votes_for, s.votes_against)}%",
            "Proposal": s.proposal_id,
            "Evidence": s.evidence_hash,
        }
        for s in data.sanctions.active
    ])
    st.dataframe(active_df, use_container_width=True, hide_index=True)

    st.markdown(
        f'<div class="section-header">History ({data.sanctions.historical_count})</div>',
        unsafe_allow_html=True,
    )
    for h in data.sanctions.historical:
        with st.expander(f"**{h.country_name}** ({h.country_code}) — {h.duration} days"):
            st.markdown(f"• Reason: {h.reason}")
            if h.was_lifted:
                st.markdown(f"• Lifted: {h.lift_reason}")


# ══════════════════════════════════════════════════════════════════
# TAB 4: PROTOCOL
# ══════════════════════════════════════════════════════════════════
with tab_protocol:
    proto = data.protocol
    st.markdown('<div class="section-header">Token Supply</div>', unsafe_allow_html=True)

    fig_supply = go.Figure(go.Bar(
        x=["Total Supply", "Circulating", "UBI Claimed"],
        y=[proto.total_supply, proto.circulating_supply, proto.total_ubi_claimed],
        marker_color=["#9b5de5", "#00bbf9", "#00f5d4"],
        text=[compact_number(x) for x in
              (proto.total_supply, proto.circulating_supply, proto.total_ubi_claimed)],
        textposition='auto',
        hovertemplate='%{x}: %{y:,} AGORA<extra></extra>',
    ))
    fig_supply.update_layout(**_get_plotly_dark_layout(height=350))
    st.plotly_chart(fig_supply, use_container_width=True)

    p1, p2, p3 = st.columns(3)
    p1.metric("Base Tx Fee", comma_number(proto.base_transaction_fee))
    p2.metric("Treasury Share", f"{comma_number(proto.treasury_fee_share)}%")
    p3.metric("Burn Share", f"{comma_number(proto.burn_share)}%")

    st.markdown('<div class="section-header">Quorum Requirements</div>', unsafe_allow_html=True)
    st.caption(f"For {comma_number(calc_users)} registered users")
    quorum_df = pd.DataFrame([
        {
            "Type": t.title(),
            "Quorum": comma_number(calculate_quorum(int(calc_users), t)),
            "Approval": f"{approval_threshold_bps(t) / 100:g}%",
            "Voting Period": f"{voting_period(t).days} days",
        }
        for t in PROPOSAL_TYPES
    ])
    st.dataframe(quorum_df, use_container_width=True, hide_index=True)

    selected_quorum = calculate_quorum(int(calc_users), calc_type)
    st.markdown(f"**{calc_type.title()}** proposals need **{comma_number(selected_quorum)}** votes.")

    with st.expander("Outcome preview"):
        o1, o2 = st.columns(2)
        yes_votes = o1.number_input("Yes votes", min_value=0, value=selected_quorum, step=100)
        no_votes = o2.number_input("No votes", min_value=0, value=0, step=100)
        outcome = proposal_outcome(int(yes_votes), int(no_votes), selected_quorum, calc_type)
        st.markdown(
            f"{render_status_badge(outcome.status)} &nbsp; approval "
            f"{outcome.approval_bps / 100:g}% • reputation {outcome.reputation_change:+d} • "
            f"bond {'returned' if outcome.bond_returned else 'kept'}",
            unsafe_allow_html=True,
        )


# ══════════════════════════════════════════════════════════════════
# TAB 5: EXPORT
# ══════════════════════════════════════════════════════════════════
with tab_export:
    st.markdown('<div class="section-header">Export Snapshot</div>', unsafe_allow_html=True)

    snapshot_json = json.dumps(to_dict(data), indent=2)
    st.download_button(
        "⬇️ Snapshot (JSON)",
        data=snapshot_json,
        file_name=f"agora_snapshot_{data.generated_at:%Y%m%d_%H%M}.json",
        mime="application/json",
    )

    proposals_df = pd.DataFrame([
        {
            "id": p.id, "title": p.title, "status": p.status, "type": p.type,
            "votes_yes": p.votes_yes, "votes_no": p.votes_no,
            "yes_percent": vote_percentage(p.votes_yes, p.votes_no),
            "quorum": p.quorum,
            "end_time": p.end_time.isoformat() if p.end_time else None,
        }
        for p in data.proposals.items
    ])
    st.download_button(
        "⬇️ Proposals (CSV)",
        data=proposals_df.to_csv(index=False),
        file_name="agora_proposals.csv",
        mime="text/csv",
    )
    st.caption(f"Snapshot generated {data.generated_at:%Y-%m-%d %H:%M} UTC")
